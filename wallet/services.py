# wallet/services.py
import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone
from rest_framework.exceptions import NotFound

from core.exceptions import InsufficientBalance, InvalidStateTransition
from .models import WalletTransaction

ZERO = Decimal("0.00")

logger = logging.getLogger(__name__)
CustomUser = get_user_model()


class WalletService:
    """Earnings, admin adjustments and withdrawals from a user's pending earnings."""

    @staticmethod
    def request_withdrawal(user, amount, bank_details):
        """
        Record a pending withdrawal. Earnings are only debited once an admin
        approves the request.
        """
        if amount > user.pending_earnings:
            raise InsufficientBalance(
                f"Requested {amount} exceeds available earnings of {user.pending_earnings}."
            )
        withdrawal = WalletTransaction.objects.create(
            user=user,
            type=WalletTransaction.TYPE_DEBIT,
            source=WalletTransaction.SOURCE_WITHDRAWAL,
            amount=amount,
            description="Withdrawal request",
            balance_after=user.pending_earnings,
            metadata={
                "status": WalletTransaction.WITHDRAWAL_PENDING,
                "bank_details": dict(bank_details),
                "requested_at": timezone.now().isoformat(),
            },
        )
        logger.info("User %s requested withdrawal %s of %s", user.id, withdrawal.id, amount)
        return withdrawal

    @staticmethod
    def pending_withdrawals(status=None):
        queryset = WalletTransaction.objects.filter(
            source=WalletTransaction.SOURCE_WITHDRAWAL
        ).select_related("user")
        if status:
            queryset = queryset.filter(metadata__status=status)
        return queryset.order_by("-created_at")

    @staticmethod
    @transaction.atomic
    def process_withdrawal(withdrawal_id, action, admin_notes, admin):
        """
        Approve or reject a pending withdrawal.

        Approval debits the user's pending earnings and turns the request
        into the recorded debit. Returns ``(withdrawal, approved)``.
        """
        try:
            withdrawal = WalletTransaction.objects.select_for_update().get(
                pk=withdrawal_id, source=WalletTransaction.SOURCE_WITHDRAWAL
            )
        except WalletTransaction.DoesNotExist:
            raise NotFound("Withdrawal request not found")

        if withdrawal.withdrawal_status != WalletTransaction.WITHDRAWAL_PENDING:
            raise InvalidStateTransition(
                f"Withdrawal request already {withdrawal.withdrawal_status}."
            )

        metadata = dict(withdrawal.metadata or {})
        metadata.update(
            {
                "admin_notes": admin_notes,
                "processed_by": admin.id,
                "processed_at": timezone.now().isoformat(),
            }
        )

        approved = action == "approve"
        if approved:
            user = CustomUser.objects.select_for_update().get(pk=withdrawal.user_id)
            if withdrawal.amount > user.pending_earnings:
                raise InsufficientBalance(
                    f"User has {user.pending_earnings} available, request is for {withdrawal.amount}."
                )
            user.pending_earnings -= withdrawal.amount
            user.save(update_fields=["pending_earnings", "updated_at"])
            withdrawal.balance_after = user.pending_earnings
            withdrawal.description = "Withdrawal"
            metadata["status"] = WalletTransaction.WITHDRAWAL_APPROVED
        else:
            metadata["status"] = WalletTransaction.WITHDRAWAL_REJECTED

        withdrawal.metadata = metadata
        withdrawal.save()
        logger.info(
            "Admin %s %s withdrawal %s for user %s",
            admin.id,
            metadata["status"],
            withdrawal.id,
            withdrawal.user_id,
        )
        return withdrawal, approved

    @staticmethod
    @transaction.atomic
    def adjust_balance(user_id, amount, type, reason, admin):
        """
        Credit or debit a user's pending earnings by hand and record the
        ``admin_adjustment`` transaction.
        """
        try:
            user = CustomUser.objects.select_for_update().get(pk=user_id)
        except CustomUser.DoesNotExist:
            raise NotFound("User not found")

        amount = abs(amount)
        if type == WalletTransaction.TYPE_DEBIT:
            if amount > user.pending_earnings:
                raise InsufficientBalance("Insufficient balance for debit adjustment.")
            user.pending_earnings -= amount
        else:
            user.pending_earnings += amount
        user.save(update_fields=["pending_earnings", "updated_at"])

        adjustment = WalletTransaction.objects.create(
            user=user,
            type=type,
            source="admin_adjustment",
            amount=amount,
            description=f"Admin adjustment: {reason}",
            balance_after=user.pending_earnings,
            metadata={
                "adjusted_by": admin.id,
                "adjusted_at": timezone.now().isoformat(),
                "reason": reason,
            },
        )
        logger.info(
            "Admin %s applied %s of %s to user %s", admin.id, type, amount, user.id
        )
        return adjustment

    @staticmethod
    def earnings_summary(user):
        transactions = WalletTransaction.objects.filter(user=user)
        credits = transactions.filter(type=WalletTransaction.TYPE_CREDIT)
        breakdown = (
            credits.values("source")
            .annotate(total_amount=Sum("amount"), transaction_count=Count("id"))
            .order_by("source")
        )
        withdrawn = transactions.filter(
            source=WalletTransaction.SOURCE_WITHDRAWAL,
            metadata__status=WalletTransaction.WITHDRAWAL_APPROVED,
        ).aggregate(total=Sum("amount"))["total"]
        return {
            "total_earnings": credits.aggregate(total=Sum("amount"))["total"] or ZERO,
            "pending_earnings": user.pending_earnings,
            "withdrawn_amount": withdrawn or ZERO,
            "wallet_balance": user.wallet_balance,
            "earnings_breakdown": list(breakdown),
        }

    @staticmethod
    def platform_summary():
        credits = Q(type=WalletTransaction.TYPE_CREDIT)
        approved_withdrawals = Q(
            source=WalletTransaction.SOURCE_WITHDRAWAL,
            metadata__status=WalletTransaction.WITHDRAWAL_APPROVED,
        )
        totals = WalletTransaction.objects.aggregate(
            total_commission=Sum(
                "amount", filter=credits & Q(source="platform_commission")
            ),
            total_lender_earnings=Sum("amount", filter=credits & Q(source="lending_fee")),
            total_withdrawals=Sum("amount", filter=approved_withdrawals),
            withdrawal_count=Count("id", filter=approved_withdrawals),
            pending_withdrawals=Count(
                "id",
                filter=Q(
                    source=WalletTransaction.SOURCE_WITHDRAWAL,
                    metadata__status=WalletTransaction.WITHDRAWAL_PENDING,
                ),
            ),
        )
        for key in ("total_commission", "total_lender_earnings", "total_withdrawals"):
            totals[key] = totals[key] or ZERO
        return totals
