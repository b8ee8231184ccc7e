# notifications/factories.py
import factory
from django.utils import timezone

from users.factories import UserFactory
from .models import UserNotificationView, VersionNotification


class VersionNotificationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = VersionNotification

    version = factory.Sequence(lambda n: f"1.{n}.0")
    title = factory.LazyAttribute(lambda obj: f"Release {obj.version}")
    description = "What's new in this release."
    content = "Full release notes."
    type = "minor"
    priority = "medium"
    features = [{"title": "Faster search", "description": "", "icon": ""}]
    release_date = factory.LazyFunction(timezone.now)
    is_active = True
    target_users = ["all"]


class UserNotificationViewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = UserNotificationView

    user = factory.SubFactory(UserFactory)
    notification = factory.SubFactory(VersionNotificationFactory)
    action = UserNotificationView.ACTION_VIEWED
