from unittest import mock

import pytest
from django.urls import reverse

from reports.factories import ReportFactory
from users.factories import UserFactory

pytestmark = pytest.mark.django_db


@pytest.fixture
def notify():
    with mock.patch("reports.views.notify_admins") as notify:
        yield notify


def test_user_files_report(user_client, user, notify):
    offender = UserFactory()

    response = user_client.post(
        reverse("report-list"),
        {"reported_user": offender.id, "reason": "fraud", "priority": "urgent"},
        format="json",
    )

    assert response.status_code == 201
    assert response.data["reporter"]["id"] == user.id
    assert response.data["status"] == "pending"
    notify.assert_called_once_with("notify_new_report", mock.ANY)


def test_cannot_report_self(user_client, user):
    response = user_client.post(
        reverse("report-list"), {"reported_user": user.id, "reason": "spam"}, format="json"
    )
    assert response.status_code == 400


def test_users_only_see_their_reports(user_client, user):
    ReportFactory(reporter=user)
    ReportFactory()

    response = user_client.get(reverse("report-list"))
    assert response.data["count"] == 1


def test_admin_updates_status(admin_client, notify):
    report = ReportFactory()

    response = admin_client.patch(
        reverse("report-detail", args=[report.id]),
        {"status": "resolved", "admin_notes": "Warned the user"},
        format="json",
    )

    assert response.status_code == 200
    report.refresh_from_db()
    assert report.status == "resolved"
    notify.assert_called_once_with("notify_report_update", report)


def test_reporter_cannot_change_status(user_client, user, notify):
    report = ReportFactory(reporter=user)

    response = user_client.patch(
        reverse("report-detail", args=[report.id]), {"status": "dismissed"}, format="json"
    )

    assert response.status_code == 403
    assert response.data["code"] == "admin_required"
    notify.assert_not_called()
