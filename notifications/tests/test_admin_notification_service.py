from decimal import Decimal
from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from celery.exceptions import Retry
from channels.layers import get_channel_layer

from books.factories import BookFactory, BorrowRequestFactory, ReviewFactory
from notifications.services import (
    AdminConnectionRegistry,
    AdminNotificationService,
    notify_admins,
)
from notifications.tasks import broadcast_admin_event, retry_countdown
from reports.factories import ReportFactory
from wallet.factories import WithdrawalRequestFactory


class RecordingLayer:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def group_send(self, group, message):
        if self.fail:
            raise ConnectionError("redis is down")
        self.sent.append((group, message))


@pytest.fixture
def layer():
    return RecordingLayer()


@pytest.fixture
def service(layer):
    return AdminNotificationService(
        channel_layer=layer, registry=AdminConnectionRegistry(), queued=False
    )


def test_emit_sends_to_admin_group_with_timestamp(service, layer):
    assert service.emit_to_admins("book:new", {"bookId": 1}) is True

    [(group, message)] = layer.sent
    assert group == "admin-room"
    assert message["type"] == "admin.notification"
    assert message["event"] == "book:new"
    assert message["payload"]["bookId"] == 1
    assert "timestamp" in message["payload"]


def test_emit_without_layer_is_a_noop():
    service = AdminNotificationService(channel_layer=None, queued=False)
    assert service.emit_to_admins("book:new", {"bookId": 1}) is False


def test_emit_swallows_layer_errors():
    service = AdminNotificationService(channel_layer=RecordingLayer(fail=True), queued=False)
    assert service.emit_to_admins("book:new", {}) is False


def test_publish_raises_without_layer():
    with pytest.raises(RuntimeError):
        AdminNotificationService(channel_layer=None).publish("book:new", {})


@pytest.mark.django_db
def test_notify_helpers_shape_payloads(service, layer):
    book = BookFactory(for_selling=True, selling_price=Decimal("250.00"))
    borrow_request = BorrowRequestFactory(book=book)
    review = ReviewFactory(book=book, rating=5)
    report = ReportFactory(priority="high")
    withdrawal = WithdrawalRequestFactory()

    service.notify_new_book_for_sale(book)
    service.notify_new_borrow_request(borrow_request)
    service.notify_new_review(review)
    service.notify_new_report(report)
    service.notify_new_withdrawal_request(withdrawal)
    service.notify_version_notification_deleted(7, "1.2.0")

    events = {message["event"]: message["payload"] for _, message in layer.sent}
    assert events["book_for_sale:new"]["sellingPrice"] == "250.00"
    assert events["borrow_request:new"]["bookTitle"] == book.title
    assert events["borrow_request:new"]["status"] == "pending"
    assert events["review:new"]["rating"] == 5
    assert events["report:new"]["priority"] == "high"
    assert events["withdrawal_request:new"] == {
        "requestId": withdrawal.id,
        "userId": withdrawal.user_id,
        "userName": withdrawal.user.get_full_name(),
        "amount": "200.00",
        "status": "pending",
        "timestamp": mock.ANY,
    }
    assert events["version_notification:deleted"]["version"] == "1.2.0"


def test_queued_service_hands_event_to_celery(layer):
    service = AdminNotificationService(channel_layer=layer, queued=True)

    with mock.patch("notifications.tasks.broadcast_admin_event.delay") as delay:
        assert service.emit_to_admins("report:update", {"reportId": 3}) is True

    event, payload = delay.call_args.args
    assert event == "report:update"
    assert payload["reportId"] == 3
    assert "timestamp" in payload
    assert layer.sent == []


def test_queued_service_reports_enqueue_failure(layer):
    service = AdminNotificationService(channel_layer=layer, queued=True)
    with mock.patch(
        "notifications.tasks.broadcast_admin_event.delay",
        side_effect=ConnectionError("broker down"),
    ):
        assert service.emit_to_admins("report:update", {}) is False


def test_notify_admins_never_raises():
    with mock.patch(
        "notifications.services.admin_notification_service.get_admin_notification_service",
        side_effect=RuntimeError("boom"),
    ):
        assert notify_admins("notify_new_book", object()) is False


def test_notify_admins_swallows_payload_errors():
    # Payload building fails on anything that is not a Book
    assert notify_admins("notify_new_book", object()) is False


def test_broadcast_task_publishes_to_group():
    channel_layer = get_channel_layer()
    channel_name = async_to_sync(channel_layer.new_channel)()
    async_to_sync(channel_layer.group_add)("admin-room", channel_name)

    result = broadcast_admin_event.apply(
        args=("user:new", {"userId": 1, "timestamp": "2024-01-01T00:00:00+00:00"})
    )

    assert result.get() is True
    message = async_to_sync(channel_layer.receive)(channel_name)
    assert message["event"] == "user:new"
    assert message["payload"]["userId"] == 1


def test_broadcast_task_retries_on_failure():
    with mock.patch(
        "notifications.tasks.get_channel_layer", return_value=RecordingLayer(fail=True)
    ):
        result = broadcast_admin_event.apply(args=("user:new", {}))

    assert result.failed()


def test_retry_countdown_grows_exponentially():
    assert [retry_countdown(n) for n in range(7)] == [10, 20, 40, 80, 160, 300, 300]


@pytest.mark.parametrize("retries, countdown", [(0, 10), (1, 20), (3, 80)])
def test_broadcast_task_retries_with_backoff(retries, countdown):
    with mock.patch(
        "notifications.tasks.get_channel_layer", return_value=RecordingLayer(fail=True)
    ), mock.patch.object(
        broadcast_admin_event, "retry", side_effect=Retry()
    ) as retry:
        broadcast_admin_event.apply(args=("user:new", {}), retries=retries)

    assert retry.call_args.kwargs["countdown"] == countdown
    assert isinstance(retry.call_args.kwargs["exc"], ConnectionError)


def test_broadcast_task_runs_on_default_worker_queue():
    from bookhive.celery import app

    assert broadcast_admin_event.name not in (app.conf.task_routes or {})
    assert app.conf.task_default_queue == "celery"
