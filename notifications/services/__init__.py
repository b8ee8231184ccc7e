from .admin_notification_service import (
    AdminNotificationService,
    get_admin_notification_service,
    notify_admins,
)
from .connection_registry import AdminConnectionRegistry, admin_connections
from .version_service import VersionNotificationService

__all__ = [
    "AdminNotificationService",
    "AdminConnectionRegistry",
    "VersionNotificationService",
    "admin_connections",
    "get_admin_notification_service",
    "notify_admins",
]
