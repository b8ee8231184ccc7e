from unittest import mock

import pytest
from django.urls import reverse

from notifications.factories import VersionNotificationFactory
from notifications.models import UserNotificationView, VersionNotification

pytestmark = pytest.mark.django_db


@pytest.fixture
def notify():
    with mock.patch("notifications.views.notify_admins") as notify:
        yield notify


def test_unviewed_endpoint(user_client, user):
    VersionNotificationFactory(version="2.0.0")

    response = user_client.get(reverse("version-notification-unviewed"))

    assert response.status_code == 200
    assert response.data["success"] is True
    assert response.data["data"]["count"] == 1
    assert response.data["data"]["notifications"][0]["version"] == "2.0.0"


def test_mark_viewed_endpoint(user_client, user):
    notification = VersionNotificationFactory()

    response = user_client.post(
        reverse("version-notification-view", args=[notification.id]),
        {"action": "dismissed"},
        format="json",
    )

    assert response.status_code == 200
    assert response.data["data"] == {
        "notification_id": notification.id,
        "action": "dismissed",
    }
    assert UserNotificationView.objects.get(user=user).action == "dismissed"
    assert user_client.get(reverse("version-notification-unviewed")).data["data"][
        "count"
    ] == 0


def test_mark_viewed_defaults_to_viewed(user_client, user):
    notification = VersionNotificationFactory()
    user_client.post(
        reverse("version-notification-view", args=[notification.id]), {}, format="json"
    )
    assert UserNotificationView.objects.get(user=user).action == "viewed"


def test_detail_not_found(user_client):
    response = user_client.get(reverse("version-notification-detail", args=[404]))
    assert response.status_code == 404
    assert response.data == {
        "success": False,
        "message": "Notification not found",
        "code": "not_found",
    }


def test_create_requires_admin(user_client, notify):
    response = user_client.post(
        reverse("version-notification-list"), {"version": "3.0.0"}, format="json"
    )
    assert response.status_code == 403
    assert response.data["code"] == "admin_required"
    notify.assert_not_called()


def test_admin_create_update_delete_publish_events(admin_client, notify):
    payload = {
        "version": "3.0.0",
        "title": "Book clubs",
        "description": "Join reading groups",
        "content": "Long form notes",
        "type": "major",
        "features": [{"title": "Clubs", "description": "Read together"}],
    }
    created = admin_client.post(
        reverse("version-notification-list"), payload, format="json"
    )
    assert created.status_code == 201
    notification_id = created.data["data"]["id"]
    assert created.data["data"]["target_users"] == ["all"]

    updated = admin_client.put(
        reverse("version-notification-detail", args=[notification_id]),
        {"priority": "high"},
        format="json",
    )
    assert updated.status_code == 200
    assert updated.data["data"]["priority"] == "high"

    deleted = admin_client.delete(
        reverse("version-notification-detail", args=[notification_id])
    )
    assert deleted.status_code == 200
    assert not VersionNotification.objects.filter(pk=notification_id).exists()

    assert [c.args[0] for c in notify.call_args_list] == [
        "notify_new_version_notification",
        "notify_version_notification_update",
        "notify_version_notification_deleted",
    ]
    assert notify.call_args_list[-1].args[1:] == (notification_id, "3.0.0")


def test_create_validates_target_users(admin_client, notify):
    response = admin_client.post(
        reverse("version-notification-list"),
        {
            "version": "3.1.0",
            "title": "t",
            "description": "d",
            "content": "c",
            "target_users": ["everyone"],
        },
        format="json",
    )
    assert response.status_code == 400
    assert response.data["code"] == "validation_error"
    assert "target_users" in response.data["errors"]


def test_admin_list_all_with_pagination(admin_client):
    VersionNotificationFactory.create_batch(3, type="patch")
    VersionNotificationFactory(type="major")

    response = admin_client.get(
        reverse("version-notification-admin-list"), {"page": 1, "limit": 2, "type": "patch"}
    )

    assert response.status_code == 200
    assert len(response.data["data"]["notifications"]) == 2
    assert response.data["data"]["pagination"]["total"] == 3
