# notifications/tasks.py
from celery import shared_task
from celery.utils.time import get_exponential_backoff_interval
from channels.layers import get_channel_layer
import logging

from .services.admin_notification_service import AdminNotificationService

logger = logging.getLogger(__name__)

RETRY_BACKOFF_BASE = 10
RETRY_BACKOFF_MAX = 300


def retry_countdown(retries):
    """Seconds to wait before retry number ``retries + 1``: 10, 20, 40, ... capped at 300."""
    return get_exponential_backoff_interval(
        factor=RETRY_BACKOFF_BASE,
        retries=retries,
        maximum=RETRY_BACKOFF_MAX,
        full_jitter=False,
    )


@shared_task(
    name="notifications.broadcast_admin_event",
    bind=True,
    max_retries=5,
    priority=10,
)
def broadcast_admin_event(self, event: str, payload: dict) -> bool:
    """
    Publish a prepared admin event to the admin group.

    Args:
        event: Event name, e.g. ``book:new``
        payload: Event data including its ``timestamp``

    Returns:
        False when no channel layer is configured, True once published.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("Channel layer not initialized, dropping queued event %s", event)
        return False

    service = AdminNotificationService(channel_layer=channel_layer, queued=False)
    try:
        service.publish(event, payload)
    except Exception as exc:
        countdown = retry_countdown(self.request.retries)
        logger.exception(
            "Failed to publish admin event %s, retrying in %ss", event, countdown
        )
        raise self.retry(exc=exc, countdown=countdown)
    return True
