# notifications/services/version_service.py
import logging
from typing import List

from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from ..models import UserNotificationView, VersionNotification

logger = logging.getLogger(__name__)


class VersionNotificationService:
    """Release announcements and per-user acknowledgement tracking"""

    @staticmethod
    def get_notification(notification_id) -> VersionNotification:
        try:
            return VersionNotification.objects.get(pk=notification_id)
        except (VersionNotification.DoesNotExist, ValueError, TypeError):
            raise NotFound("Notification not found")

    @staticmethod
    def list_unviewed(user) -> List[VersionNotification]:
        """
        Active, unexpired notifications aimed at the user's role that the
        user has not acknowledged yet, newest release first.

        Role targeting is applied in Python because JSON containment lookups
        are not available on every database backend.
        """
        now = timezone.now()
        role = getattr(user, "role", None) or "user"
        candidates = (
            VersionNotification.objects.filter(is_active=True)
            .filter(Q(expires_at__isnull=True) | Q(expires_at__gt=now))
            .exclude(views__user=user)
            .order_by("-release_date")
        )
        return [notification for notification in candidates if notification.targets_role(role)]

    @staticmethod
    def mark_viewed(user, notification_id, action=UserNotificationView.ACTION_VIEWED):
        """Record or overwrite the user's acknowledgement of a notification."""
        valid_actions = dict(UserNotificationView.ACTION_CHOICES)
        if action not in valid_actions:
            raise ValidationError(
                {"action": [f"Must be one of: {', '.join(valid_actions)}"]}
            )

        notification = VersionNotificationService.get_notification(notification_id)
        view, created = UserNotificationView.objects.update_or_create(
            user=user,
            notification=notification,
            defaults={"action": action, "viewed_at": timezone.now()},
        )
        logger.info(
            "User %s marked notification %s as %s%s",
            user.id,
            notification.id,
            action,
            "" if created else " (updated)",
        )
        return view

    @staticmethod
    def create_notification(data, actor=None) -> VersionNotification:
        notification = VersionNotification.objects.create(**data)
        logger.info(
            "Created version notification %s by user %s",
            notification.version,
            getattr(actor, "id", None),
        )
        return notification

    @staticmethod
    def update_notification(notification_id, data) -> VersionNotification:
        notification = VersionNotificationService.get_notification(notification_id)
        for field, value in data.items():
            setattr(notification, field, value)
        notification.save()
        logger.info("Updated version notification %s", notification.version)
        return notification

    @staticmethod
    def list_all(page=1, limit=20, queryset=None):
        page = max(int(page), 1)
        limit = max(int(limit), 1)
        if queryset is None:
            queryset = VersionNotification.objects.all()
        queryset = queryset.order_by("-release_date")
        total = queryset.count()
        offset = (page - 1) * limit
        return {
            "notifications": list(queryset[offset : offset + limit]),
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": (total + limit - 1) // limit,
            },
        }

    @staticmethod
    @transaction.atomic
    def delete_notification(notification_id):
        """Delete a notification together with every view record of it."""
        notification = VersionNotificationService.get_notification(notification_id)
        deleted_views, _ = UserNotificationView.objects.filter(
            notification=notification
        ).delete()
        version = notification.version
        pk = notification.pk
        notification.delete()
        logger.info(
            "Deleted notification %s (%s) and %s view records",
            pk,
            version,
            deleted_views,
        )
        return pk, version
