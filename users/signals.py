# users/signals.py
import logging
from django.db.models.signals import post_save
from django.dispatch import receiver

from notifications.services import notify_admins
from .models import CustomUser

logger = logging.getLogger(__name__)


@receiver(post_save, sender=CustomUser)
def broadcast_user_changes(sender, instance, created, **kwargs):
    """Tell connected admins about new users and role/activation changes."""
    if created:
        notify_admins("notify_new_user", instance)
    elif getattr(instance, "_admin_fields_changed", None):
        notify_admins("notify_user_update", instance)
