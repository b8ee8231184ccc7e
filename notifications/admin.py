from django.contrib import admin
from .models import UserNotificationView, VersionNotification
from .services import VersionNotificationService


@admin.register(VersionNotification)
class VersionNotificationAdmin(admin.ModelAdmin):
    list_display = ("version", "title", "type", "priority", "is_active", "release_date")
    list_filter = ("type", "priority", "is_active")
    search_fields = ("version", "title")
    readonly_fields = ("created_at", "updated_at")

    def delete_model(self, request, obj):
        VersionNotificationService.delete_notification(obj.pk)


@admin.register(UserNotificationView)
class UserNotificationViewAdmin(admin.ModelAdmin):
    list_display = ("user", "notification", "action", "viewed_at")
    list_filter = ("action",)
    search_fields = ("user__username", "notification__version")
    readonly_fields = ("viewed_at",)
