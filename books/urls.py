from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import BookViewSet, BorrowRequestViewSet, ReviewViewSet

router = SimpleRouter()
router.register(r"books", BookViewSet, basename="book")
router.register(r"borrow-requests", BorrowRequestViewSet, basename="borrow-request")
router.register(r"reviews", ReviewViewSet, basename="review")

urlpatterns = [
    path("", include(router.urls)),
]
