# reports/factories.py
import factory

from users.factories import UserFactory
from .models import Report


class ReportFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Report

    reporter = factory.SubFactory(UserFactory)
    reported_user = factory.SubFactory(UserFactory)
    reason = "spam"
    description = "Sends the same listing over and over."
    priority = "medium"
