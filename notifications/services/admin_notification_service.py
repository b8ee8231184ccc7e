# notifications/services/admin_notification_service.py
from channels.layers import get_channel_layer
from asgiref.sync import async_to_sync
from django.conf import settings
from django.utils import timezone
import logging

from .connection_registry import admin_connections

logger = logging.getLogger(__name__)

ADMIN_EVENT_MESSAGE_TYPE = "admin.notification"


def _name(user):
    if user is None:
        return None
    return user.get_full_name() or user.username


def _str(value):
    return str(value) if value is not None else None


class AdminNotificationService:
    """
    Publishes dashboard events to every admin websocket in the admin group.

    Each ``notify_*`` method shapes one event's payload and hands it to
    :meth:`emit_to_admins`, which never raises. With ``queued=True`` events
    go through the ``notifications.broadcast_admin_event`` Celery task
    instead, which retries failed publishes.
    """

    def __init__(self, channel_layer=None, group_name=None, registry=None, queued=None):
        self.channel_layer = channel_layer
        self.group_name = group_name or getattr(
            settings, "ADMIN_NOTIFICATION_GROUP", "admin-room"
        )
        self.registry = registry if registry is not None else admin_connections
        self.queued = (
            queued
            if queued is not None
            else getattr(settings, "ADMIN_NOTIFICATIONS_QUEUED", False)
        )

    @staticmethod
    def build_payload(data=None):
        return {**(data or {}), "timestamp": timezone.now().isoformat()}

    def publish(self, event, payload):
        """Send a prepared payload to the admin group. Raises on failure."""
        if self.channel_layer is None:
            raise RuntimeError("Channel layer is not configured")

        async_to_sync(self.channel_layer.group_send)(
            self.group_name,
            {
                "type": ADMIN_EVENT_MESSAGE_TYPE,
                "event": event,
                "payload": payload,
            },
        )
        logger.info(
            "Admin notification emitted: %s (%d admin connections)",
            event,
            self.registry.get_active_connections_count(),
        )

    def emit_to_admins(self, event, data=None):
        """Broadcast ``event`` to all connected admins; returns False if not sent."""
        if self.channel_layer is None:
            logger.warning(
                "Channel layer not initialized, dropping admin notification %s", event
            )
            return False

        payload = self.build_payload(data)
        if self.queued:
            return self._enqueue(event, payload)

        try:
            self.publish(event, payload)
        except Exception:
            logger.exception("Failed to emit admin notification %s", event)
            return False
        return True

    def _enqueue(self, event, payload):
        from ..tasks import broadcast_admin_event

        try:
            broadcast_admin_event.delay(event, payload)
        except Exception:
            logger.exception("Failed to queue admin notification %s", event)
            return False
        logger.debug("Queued admin notification %s", event)
        return True

    # Borrowing

    def notify_new_borrow_request(self, borrow_request):
        return self.emit_to_admins(
            "borrow_request:new",
            {
                "borrowRequestId": borrow_request.id,
                "bookTitle": borrow_request.book.title,
                "borrowerName": _name(borrow_request.borrower),
                "status": borrow_request.status,
            },
        )

    def notify_borrow_request_update(self, borrow_request):
        return self.emit_to_admins(
            "borrow_request:update",
            {
                "borrowRequestId": borrow_request.id,
                "bookTitle": borrow_request.book.title,
                "status": borrow_request.status,
            },
        )

    # Users

    def notify_new_user(self, user):
        return self.emit_to_admins(
            "user:new",
            {"userId": user.id, "userName": _name(user), "userEmail": user.email},
        )

    def notify_user_update(self, user):
        return self.emit_to_admins(
            "user:update",
            {
                "userId": user.id,
                "userName": _name(user),
                "isActive": user.is_active,
                "role": user.role,
            },
        )

    # Books

    def _book_data(self, book):
        return {
            "bookId": book.id,
            "bookTitle": book.title,
            "bookAuthor": book.author,
            "ownerName": _name(book.owner),
        }

    def notify_new_book(self, book):
        return self.emit_to_admins("book:new", self._book_data(book))

    def notify_new_book_for_sale(self, book):
        data = self._book_data(book)
        data["sellingPrice"] = _str(book.selling_price)
        return self.emit_to_admins("book_for_sale:new", data)

    def notify_book_updated(self, book):
        return self.emit_to_admins("book:updated", self._book_data(book))

    def notify_book_deleted(self, book):
        return self.emit_to_admins("book:deleted", self._book_data(book))

    def notify_new_review(self, review):
        return self.emit_to_admins(
            "review:new",
            {
                "reviewId": review.id,
                "bookTitle": review.book.title,
                "rating": review.rating,
                "reviewerName": _name(review.user),
            },
        )

    # Moderation

    def notify_new_report(self, report):
        return self.emit_to_admins(
            "report:new",
            {
                "reportId": report.id,
                "reportedUserId": report.reported_user_id,
                "reporterName": _name(report.reporter),
                "reason": report.reason,
                "priority": report.priority,
            },
        )

    def notify_report_update(self, report):
        return self.emit_to_admins(
            "report:update",
            {"reportId": report.id, "status": report.status},
        )

    # Wallet

    def notify_new_withdrawal_request(self, transaction):
        return self.emit_to_admins(
            "withdrawal_request:new",
            {
                "requestId": transaction.id,
                "userId": transaction.user_id,
                "userName": _name(transaction.user),
                "amount": _str(transaction.amount),
                "status": transaction.metadata.get("status"),
            },
        )

    def notify_withdrawal_update(self, transaction):
        return self.emit_to_admins(
            "withdrawal_request:update",
            {
                "requestId": transaction.id,
                "userId": transaction.user_id,
                "amount": _str(transaction.amount),
                "status": transaction.metadata.get("status"),
                "adminNotes": transaction.metadata.get("admin_notes"),
            },
        )

    def notify_wallet_transaction(self, transaction):
        return self.emit_to_admins(
            "wallet_transaction:new",
            {
                "transactionId": transaction.id,
                "userId": transaction.user_id,
                "type": transaction.type,
                "source": transaction.source,
                "amount": _str(transaction.amount),
                "balanceAfter": _str(transaction.balance_after),
            },
        )

    # Release announcements

    def _version_data(self, notification):
        return {
            "notificationId": notification.id,
            "version": notification.version,
            "title": notification.title,
            "type": notification.type,
            "priority": notification.priority,
            "isActive": notification.is_active,
        }

    def notify_new_version_notification(self, notification):
        return self.emit_to_admins(
            "version_notification:new", self._version_data(notification)
        )

    def notify_version_notification_update(self, notification):
        return self.emit_to_admins(
            "version_notification:update", self._version_data(notification)
        )

    def notify_version_notification_deleted(self, notification_id, version):
        return self.emit_to_admins(
            "version_notification:deleted",
            {"notificationId": notification_id, "version": version},
        )


def get_admin_notification_service():
    """Build a service bound to the configured channel layer."""
    return AdminNotificationService(channel_layer=get_channel_layer())


def notify_admins(method_name, *args, **kwargs):
    """
    Call ``AdminNotificationService.<method_name>`` without ever raising.

    For use from request handlers: a failed broadcast is logged and the
    request carries on.
    """
    try:
        service = get_admin_notification_service()
        return getattr(service, method_name)(*args, **kwargs)
    except Exception:
        logger.exception("Failed to send admin notification via %s", method_name)
        return False
