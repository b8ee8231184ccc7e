# wallet/models.py
from django.conf import settings
from django.db import models


class WalletTransaction(models.Model):
    TYPE_CREDIT = "credit"
    TYPE_DEBIT = "debit"
    TYPE_CHOICES = [
        (TYPE_CREDIT, "Credit"),
        (TYPE_DEBIT, "Debit"),
    ]
    SOURCE_WITHDRAWAL = "withdrawal"
    SOURCE_CHOICES = [
        ("lending_fee", "Lending Fee"),
        ("book_sale", "Book Sale"),
        ("platform_commission", "Platform Commission"),
        (SOURCE_WITHDRAWAL, "Withdrawal"),
        ("refund", "Refund"),
        ("penalty", "Penalty"),
        ("admin_adjustment", "Admin Adjustment"),
    ]

    WITHDRAWAL_PENDING = "pending"
    WITHDRAWAL_APPROVED = "approved"
    WITHDRAWAL_REJECTED = "rejected"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="wallet_transactions",
    )
    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    source = models.CharField(max_length=30, choices=SOURCE_CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.CharField(max_length=255, blank=True)
    balance_after = models.DecimalField(max_digits=12, decimal_places=2)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="wallet_user_created_idx"),
            models.Index(fields=["source"], name="wallet_source_idx"),
        ]

    def __str__(self):
        return f"{self.type} {self.amount} ({self.source}) for {self.user_id}"

    @property
    def withdrawal_status(self):
        return (self.metadata or {}).get("status")
