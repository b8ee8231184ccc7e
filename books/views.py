# books/views.py
from datetime import timedelta

from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.cache import clear_cache
from core.decorators import cache_response
from core.exceptions import InvalidStateTransition
from notifications.services import notify_admins
from users.permissions import IsOwnerOrAdmin
from .filters import BookFilter, BorrowRequestFilter
from .models import Book, BorrowRequest, Review
from .serializers import (
    BookSerializer,
    BorrowRequestSerializer,
    BorrowStatusSerializer,
    ReviewSerializer,
)
import logging

logger = logging.getLogger(__name__)

# Borrow states in which the book is out of the owner's hands
HOLDING_STATUSES = {BorrowRequest.STATUS_APPROVED, BorrowRequest.STATUS_BORROWED}


@extend_schema_view(
    list=extend_schema(summary="List books", tags=["Books"]),
    retrieve=extend_schema(summary="Book detail", tags=["Books"]),
    create=extend_schema(summary="List a book", tags=["Books"]),
    update=extend_schema(summary="Update a book", tags=["Books"]),
    partial_update=extend_schema(summary="Update a book", tags=["Books"]),
    destroy=extend_schema(summary="Remove a book", tags=["Books"]),
)
class BookViewSet(viewsets.ModelViewSet):
    """Books offered for borrowing or sale. Reads are served from the response cache."""

    queryset = Book.objects.select_related("owner").prefetch_related("reviews")
    serializer_class = BookSerializer
    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]
    filterset_class = BookFilter
    search_fields = ["title", "author", "description", "isbn"]
    ordering_fields = ["created_at", "title", "selling_price", "lending_fee"]
    ordering = ["-created_at"]

    def get_permissions(self):
        if self.action in ("update", "partial_update", "destroy"):
            return [IsAuthenticated(), IsOwnerOrAdmin()]
        return [IsAuthenticated()]

    @cache_response()
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @cache_response()
    def retrieve(self, request, *args, **kwargs):
        return super().retrieve(request, *args, **kwargs)

    def perform_create(self, serializer):
        book = serializer.save(owner=self.request.user)
        clear_cache("books")
        logger.info("User %s listed book %s", self.request.user.id, book.id)
        notify_admins("notify_new_book", book)
        if book.for_selling:
            notify_admins("notify_new_book_for_sale", book)

    def perform_update(self, serializer):
        was_for_sale = serializer.instance.for_selling
        book = serializer.save()
        clear_cache("books")
        notify_admins("notify_book_updated", book)
        if book.for_selling and not was_for_sale:
            notify_admins("notify_new_book_for_sale", book)

    def perform_destroy(self, instance):
        # Payload needs the book before its row is gone
        notify_admins("notify_book_deleted", instance)
        logger.info("Book %s deleted by user %s", instance.id, self.request.user.id)
        instance.delete()
        clear_cache("books")


@extend_schema_view(
    list=extend_schema(summary="Borrow requests I sent or received", tags=["Borrowing"]),
    retrieve=extend_schema(summary="Borrow request detail", tags=["Borrowing"]),
    create=extend_schema(summary="Ask to borrow a book", tags=["Borrowing"]),
)
class BorrowRequestViewSet(viewsets.ModelViewSet):
    serializer_class = BorrowRequestSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = BorrowRequestFilter
    ordering = ["-request_date"]
    http_method_names = ["get", "post", "head", "options"]

    def get_queryset(self):
        queryset = BorrowRequest.objects.select_related("book", "borrower", "owner")
        user = self.request.user
        if user.is_admin:
            return queryset
        return queryset.filter(Q(borrower=user) | Q(owner=user))

    def perform_create(self, serializer):
        book = serializer.validated_data["book"]
        borrow_request = serializer.save(borrower=self.request.user, owner=book.owner)
        logger.info(
            "User %s requested to borrow book %s", self.request.user.id, book.id
        )
        notify_admins("notify_new_borrow_request", borrow_request)

    @extend_schema(
        summary="Move a borrow request to a new status",
        request=BorrowStatusSerializer,
        responses={200: BorrowRequestSerializer},
        tags=["Borrowing"],
    )
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        borrow_request = self.get_object()
        serializer = BorrowStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data["status"]

        if new_status not in borrow_request.allowed_transitions(request.user):
            raise InvalidStateTransition(
                f"Cannot change request from {borrow_request.status} to {new_status}."
            )

        with transaction.atomic():
            book = Book.objects.select_for_update().get(pk=borrow_request.book_id)
            # Only one request may hold a book at a time
            if new_status == BorrowRequest.STATUS_APPROVED and not book.is_available:
                raise InvalidStateTransition(
                    "This book is already reserved or lent out."
                )
            borrow_request.book = book
            previous = borrow_request.status
            borrow_request.status = new_status
            if new_status == BorrowRequest.STATUS_BORROWED:
                borrow_request.due_date = timezone.now() + timedelta(
                    days=borrow_request.book.lending_duration
                )
            borrow_request.save()

            if new_status in HOLDING_STATUSES:
                book.is_available = False
                book.save(update_fields=["is_available", "updated_at"])
            elif previous in HOLDING_STATUSES:
                book.is_available = True
                book.save(update_fields=["is_available", "updated_at"])

        clear_cache("books")
        logger.info(
            "Borrow request %s moved from %s to %s by user %s",
            borrow_request.id,
            previous,
            new_status,
            request.user.id,
        )
        notify_admins("notify_borrow_request_update", borrow_request)
        return Response(BorrowRequestSerializer(borrow_request).data)


@extend_schema_view(
    list=extend_schema(summary="List reviews", tags=["Reviews"]),
    retrieve=extend_schema(summary="Review detail", tags=["Reviews"]),
    create=extend_schema(summary="Review a book", tags=["Reviews"]),
)
class ReviewViewSet(viewsets.ModelViewSet):
    queryset = Review.objects.select_related("book", "user")
    serializer_class = ReviewSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["book", "user", "rating"]
    ordering_fields = ["created_at", "rating"]
    ordering = ["-created_at"]
    owner_field = "user"

    def get_permissions(self):
        if self.action in ("update", "partial_update", "destroy"):
            return [IsAuthenticated(), IsOwnerOrAdmin()]
        return [IsAuthenticated()]

    @cache_response()
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        review = serializer.save(user=self.request.user)
        # Book payloads embed the average rating
        clear_cache("books")
        clear_cache("reviews")
        notify_admins("notify_new_review", review)

    def perform_update(self, serializer):
        serializer.save()
        clear_cache("books")
        clear_cache("reviews")

    def perform_destroy(self, instance):
        instance.delete()
        clear_cache("books")
        clear_cache("reviews")
