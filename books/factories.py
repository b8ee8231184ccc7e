# books/factories.py
from decimal import Decimal

import factory

from users.factories import UserFactory
from .models import Book, BorrowRequest, Review


class BookFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Book

    title = factory.Sequence(lambda n: f"Book {n}")
    author = "Test Author"
    category = "fiction"
    description = "A book listed via Factory Boy."
    owner = factory.SubFactory(UserFactory)
    is_available = True
    for_borrowing = True
    lending_duration = 14
    lending_fee = Decimal("10.00")
    for_selling = False


class BorrowRequestFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = BorrowRequest

    book = factory.SubFactory(BookFactory)
    borrower = factory.SubFactory(UserFactory)
    owner = factory.SelfAttribute("book.owner")
    status = BorrowRequest.STATUS_PENDING


class ReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Review

    book = factory.SubFactory(BookFactory)
    user = factory.SubFactory(UserFactory)
    rating = 4
    comment = "Worth a read."
