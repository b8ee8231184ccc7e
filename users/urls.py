# users/urls.py
from django.urls import path
from .views import AdminUserViewSet, CurrentUserView, RegisterView

urlpatterns = [
    path("register/", RegisterView.as_view(), name="user-register"),
    path("me/", CurrentUserView.as_view(), name="user-me"),
    path("", AdminUserViewSet.as_view({"get": "list"}), name="user-list"),
    path(
        "<int:pk>/",
        AdminUserViewSet.as_view({"get": "retrieve", "patch": "partial_update"}),
        name="user-detail",
    ),
]
