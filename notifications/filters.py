# notifications/filters.py
import django_filters
from .models import VersionNotification


class VersionNotificationFilter(django_filters.FilterSet):
    type = django_filters.CharFilter(field_name="type", lookup_expr="exact")
    priority = django_filters.CharFilter(field_name="priority", lookup_expr="iexact")
    is_active = django_filters.BooleanFilter(field_name="is_active")
    release_date = django_filters.DateFromToRangeFilter(field_name="release_date")

    class Meta:
        model = VersionNotification
        fields = ["type", "priority", "is_active", "release_date"]
