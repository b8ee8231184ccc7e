# wallet/filters.py
import django_filters
from .models import WalletTransaction


class WalletTransactionFilter(django_filters.FilterSet):
    type = django_filters.ChoiceFilter(choices=WalletTransaction.TYPE_CHOICES)
    source = django_filters.ChoiceFilter(choices=WalletTransaction.SOURCE_CHOICES)
    created_at = django_filters.DateFromToRangeFilter(field_name="created_at")

    class Meta:
        model = WalletTransaction
        fields = ["type", "source", "user", "created_at"]
