from unittest import mock

import pytest
from django.urls import reverse

from users.factories import AdminFactory, SuperAdminFactory, UserFactory

pytestmark = pytest.mark.django_db


def test_is_admin_roles():
    assert not UserFactory().is_admin
    assert AdminFactory().is_admin
    assert SuperAdminFactory().is_admin
    assert UserFactory(is_superuser=True).is_admin


def test_register_creates_user_and_notifies_admins(api_client):
    with mock.patch("users.signals.notify_admins") as notify:
        response = api_client.post(
            reverse("user-register"),
            {
                "username": "newreader",
                "email": "newreader@example.com",
                "password": "a-Strong-passw0rd",
            },
            format="json",
        )

    assert response.status_code == 201
    assert "password" not in response.data
    notify.assert_called_once()
    assert notify.call_args.args[0] == "notify_new_user"
    assert notify.call_args.args[1].username == "newreader"


def test_role_change_broadcasts_user_update(admin_client):
    target = UserFactory()

    with mock.patch("users.signals.notify_admins") as notify:
        response = admin_client.patch(
            reverse("user-detail", args=[target.pk]), {"role": "admin"}, format="json"
        )

    assert response.status_code == 200
    target.refresh_from_db()
    assert target.role == "admin"
    notify.assert_called_once_with("notify_user_update", mock.ANY)


def test_profile_edit_does_not_broadcast(user_client, user):
    with mock.patch("users.signals.notify_admins") as notify:
        response = user_client.patch(
            reverse("user-me"), {"first_name": "Ada"}, format="json"
        )

    assert response.status_code == 200
    assert response.data["first_name"] == "Ada"
    notify.assert_not_called()


def test_user_cannot_promote_self(user_client, user):
    user_client.patch(reverse("user-me"), {"role": "admin"}, format="json")
    user.refresh_from_db()
    assert user.role == "user"


def test_user_list_is_admin_only(user_client, admin_client):
    assert user_client.get(reverse("user-list")).status_code == 403
    response = admin_client.get(reverse("user-list"))
    assert response.status_code == 200
    assert response.data["count"] >= 1


def test_obtain_jwt_token(api_client):
    UserFactory(username="reader", password="s3cret-pass")
    response = api_client.post(
        reverse("token_obtain_pair"),
        {"username": "reader", "password": "s3cret-pass"},
        format="json",
    )
    assert response.status_code == 200
    assert "access" in response.data and "refresh" in response.data
