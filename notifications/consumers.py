# notifications/consumers.py
from channels.generic.websocket import AsyncJsonWebsocketConsumer
import logging
from django.conf import settings
from django.utils import timezone

from .services.connection_registry import admin_connections

logger = logging.getLogger(__name__)


class AdminNotificationConsumer(AsyncJsonWebsocketConsumer):
    """
    Push channel for the admin dashboard.

    Every authenticated user may connect; only admins join the admin group
    and receive dashboard events.
    """

    registry = admin_connections

    async def connect(self):
        self.user = self.scope.get("user")
        self.is_admin_connection = False

        if self.user is None or self.user.is_anonymous:
            logger.warning("Anonymous user attempted to connect to admin notifications")
            await self.close()
            return

        self.group_name = getattr(settings, "ADMIN_NOTIFICATION_GROUP", "admin-room")
        await self.accept()

        if getattr(self.user, "is_admin", False):
            await self.channel_layer.group_add(self.group_name, self.channel_name)
            self.is_admin_connection = True
            self.registry.register_connection(self.user.id, self.channel_name)
            logger.info(
                "Admin user %s (%s) joined %s",
                self.user.id,
                self.user.role,
                self.group_name,
            )
            await self.send_json(
                {
                    "event": "admin-connected",
                    "data": {
                        "message": "Connected to admin notifications",
                        "timestamp": timezone.now().isoformat(),
                    },
                }
            )
        else:
            logger.info("Regular user %s connected", self.user.id)

    async def disconnect(self, close_code):
        if not getattr(self, "is_admin_connection", False):
            return
        try:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)
        finally:
            self.registry.unregister_connection(self.user.id, self.channel_name)
            logger.info("Admin user %s left %s", self.user.id, self.group_name)

    async def receive_json(self, content, **kwargs):
        msg_type = content.get("type")

        if msg_type == "ping":
            await self.send_json({"type": "pong"})
        elif msg_type == "check-admin-room":
            await self.send_json(
                {
                    "event": "admin-room-status",
                    "data": {
                        "isInAdminRoom": self.is_admin_connection,
                        "userRole": getattr(self.user, "role", None),
                    },
                }
            )
        else:
            logger.debug("Ignoring websocket message of type %s", msg_type)

    async def admin_notification(self, event):
        """Relay an ``admin.notification`` group message to the socket."""
        await self.send_json({"event": event["event"], "data": event["payload"]})
