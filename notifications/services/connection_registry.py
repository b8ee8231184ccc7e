# notifications/services/connection_registry.py
import logging
from django.utils import timezone

logger = logging.getLogger(__name__)


class AdminConnectionRegistry:
    """
    Tracks the admin websocket connections held by this process.

    Used only for reporting subscriber counts. Connections on other server
    instances are not visible here.
    """

    def __init__(self):
        self.active_connections = {}  # Map of user_id -> {channel_name: info}

    def register_connection(self, user_id, channel_name):
        self.active_connections.setdefault(user_id, {})[channel_name] = {
            "connected_at": timezone.now(),
        }
        logger.info(
            "Registered admin connection for user %s: %s", user_id, channel_name
        )

    def unregister_connection(self, user_id, channel_name):
        connections = self.active_connections.get(user_id)
        if not connections:
            return
        if connections.pop(channel_name, None) is not None:
            logger.info(
                "Unregistered admin connection for user %s: %s", user_id, channel_name
            )
        if not connections:
            del self.active_connections[user_id]

    def get_active_connections_count(self):
        return sum(len(connections) for connections in self.active_connections.values())

    def get_connected_admin_ids(self):
        return list(self.active_connections.keys())

    def is_user_connected(self, user_id):
        return bool(self.active_connections.get(user_id))


admin_connections = AdminConnectionRegistry()
