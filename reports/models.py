# reports/models.py
from django.conf import settings
from django.db import models


class Report(models.Model):
    """A user's complaint about another user, reviewed by admins"""

    REASON_CHOICES = [
        ("spam", "Spam"),
        ("harassment", "Harassment"),
        ("fraud", "Fraud"),
        ("inappropriate_content", "Inappropriate Content"),
        ("damaged_book", "Damaged Book"),
        ("other", "Other"),
    ]
    STATUS_PENDING = "pending"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        ("reviewed", "Reviewed"),
        ("resolved", "Resolved"),
        ("dismissed", "Dismissed"),
    ]
    PRIORITY_CHOICES = [
        ("low", "Low"),
        ("medium", "Medium"),
        ("high", "High"),
        ("urgent", "Urgent"),
    ]

    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reports_filed",
    )
    reported_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reports_received",
    )
    reason = models.CharField(max_length=30, choices=REASON_CHOICES)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING
    )
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default="medium")
    admin_notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Report {self.pk}: {self.reason} ({self.status})"
