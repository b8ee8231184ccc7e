# wallet/serializers.py
from decimal import Decimal

from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import WalletTransaction


class WalletTransactionSerializer(serializers.ModelSerializer):
    status = serializers.CharField(source="withdrawal_status", read_only=True)

    class Meta:
        model = WalletTransaction
        fields = [
            "id",
            "type",
            "source",
            "amount",
            "description",
            "balance_after",
            "status",
            "metadata",
            "created_at",
        ]
        read_only_fields = fields


class WithdrawalRequestDetailSerializer(WalletTransactionSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta(WalletTransactionSerializer.Meta):
        fields = WalletTransactionSerializer.Meta.fields + ["user"]
        read_only_fields = fields


class BankDetailsSerializer(serializers.Serializer):
    account_number = serializers.CharField(max_length=34)
    ifsc_code = serializers.CharField(max_length=11)
    account_holder_name = serializers.CharField(max_length=255)


class WithdrawalRequestSerializer(serializers.Serializer):
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )
    bank_details = BankDetailsSerializer()


class ProcessWithdrawalSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["approve", "reject"])
    admin_notes = serializers.CharField(max_length=1000)


class WalletSummarySerializer(serializers.Serializer):
    wallet_balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)


class BalanceAdjustmentSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01")
    )
    type = serializers.ChoiceField(choices=WalletTransaction.TYPE_CHOICES)
    reason = serializers.CharField(max_length=200)


class EarningsBreakdownSerializer(serializers.Serializer):
    source = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    transaction_count = serializers.IntegerField()


class EarningsSummarySerializer(serializers.Serializer):
    total_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    withdrawn_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    wallet_balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    earnings_breakdown = EarningsBreakdownSerializer(many=True)


class PlatformSummarySerializer(serializers.Serializer):
    total_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_lender_earnings = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_withdrawals = serializers.DecimalField(max_digits=14, decimal_places=2)
    withdrawal_count = serializers.IntegerField()
    pending_withdrawals = serializers.IntegerField()
