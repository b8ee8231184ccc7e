# books/filters.py
import django_filters
from .models import Book, BorrowRequest


class BookFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")
    author = django_filters.CharFilter(field_name="author", lookup_expr="icontains")
    min_price = django_filters.NumberFilter(field_name="selling_price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="selling_price", lookup_expr="lte")

    class Meta:
        model = Book
        fields = [
            "category",
            "author",
            "condition",
            "owner",
            "is_available",
            "for_borrowing",
            "for_selling",
        ]


class BorrowRequestFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=BorrowRequest.STATUS_CHOICES)

    class Meta:
        model = BorrowRequest
        fields = ["status", "book"]
