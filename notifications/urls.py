# notifications/urls.py
from django.urls import path
from .views import (
    AdminVersionNotificationListView,
    MarkNotificationViewedView,
    UnviewedNotificationsView,
    VersionNotificationDetailView,
    VersionNotificationListView,
)

urlpatterns = [
    path("", VersionNotificationListView.as_view(), name="version-notification-list"),
    path(
        "unviewed/",
        UnviewedNotificationsView.as_view(),
        name="version-notification-unviewed",
    ),
    path(
        "admin/all/",
        AdminVersionNotificationListView.as_view(),
        name="version-notification-admin-list",
    ),
    path(
        "<int:pk>/",
        VersionNotificationDetailView.as_view(),
        name="version-notification-detail",
    ),
    path(
        "<int:pk>/view/",
        MarkNotificationViewedView.as_view(),
        name="version-notification-view",
    ),
]
