# books/models.py
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class Book(models.Model):
    CONDITION_CHOICES = [
        ("new", "New"),
        ("like_new", "Like New"),
        ("good", "Good"),
        ("fair", "Fair"),
        ("poor", "Poor"),
    ]

    title = models.CharField(max_length=255)
    author = models.CharField(max_length=255)
    category = models.CharField(max_length=100, blank=True)
    description = models.TextField(blank=True)
    isbn = models.CharField(max_length=20, blank=True)
    condition = models.CharField(
        max_length=10, choices=CONDITION_CHOICES, default="good"
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="books"
    )
    is_available = models.BooleanField(default=True)

    for_borrowing = models.BooleanField(default=True)
    lending_duration = models.PositiveIntegerField(
        default=14, validators=[MinValueValidator(1), MaxValueValidator(365)]
    )
    security_deposit = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    lending_fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )

    for_selling = models.BooleanField(default=False)
    selling_price = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} by {self.author}"


class BorrowRequest(models.Model):
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_DENIED = "denied"
    STATUS_BORROWED = "borrowed"
    STATUS_RETURNED = "returned"
    STATUS_CANCELLED = "cancelled"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_DENIED, "Denied"),
        (STATUS_BORROWED, "Borrowed"),
        (STATUS_RETURNED, "Returned"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    # status -> statuses reachable from it, and who may move it there
    OWNER_TRANSITIONS = {
        STATUS_PENDING: {STATUS_APPROVED, STATUS_DENIED},
        STATUS_APPROVED: {STATUS_BORROWED},
        STATUS_BORROWED: {STATUS_RETURNED},
    }
    BORROWER_TRANSITIONS = {
        STATUS_PENDING: {STATUS_CANCELLED},
        STATUS_APPROVED: {STATUS_CANCELLED},
    }

    book = models.ForeignKey(
        Book, on_delete=models.CASCADE, related_name="borrow_requests"
    )
    borrower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="borrow_requests",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="lend_requests",
    )
    status = models.CharField(
        max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING
    )
    message = models.TextField(blank=True)
    request_date = models.DateTimeField(default=timezone.now)
    due_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-request_date"]

    def __str__(self):
        return f"{self.borrower_id} -> {self.book_id} ({self.status})"

    def allowed_transitions(self, user):
        allowed = set()
        if user.pk == self.owner_id or getattr(user, "is_admin", False):
            allowed |= self.OWNER_TRANSITIONS.get(self.status, set())
        if user.pk == self.borrower_id:
            allowed |= self.BORROWER_TRANSITIONS.get(self.status, set())
        return allowed


class Review(models.Model):
    book = models.ForeignKey(Book, on_delete=models.CASCADE, related_name="reviews")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews"
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["book", "user"], name="unique_book_review")
        ]

    def __str__(self):
        return f"{self.user_id} rated {self.book_id}: {self.rating}"
