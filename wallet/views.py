# wallet/views.py
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import filters, generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.services import notify_admins
from users.permissions import IsAdminRole
from .filters import WalletTransactionFilter
from .models import WalletTransaction
from .serializers import (
    BalanceAdjustmentSerializer,
    EarningsSummarySerializer,
    PlatformSummarySerializer,
    ProcessWithdrawalSerializer,
    WalletSummarySerializer,
    WalletTransactionSerializer,
    WithdrawalRequestDetailSerializer,
    WithdrawalRequestSerializer,
)
from .services import WalletService
import logging

logger = logging.getLogger(__name__)


class WalletSummaryView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Wallet balance and pending earnings",
        responses={200: WalletSummarySerializer},
        tags=["Wallet"],
    )
    def get(self, request):
        data = WalletSummarySerializer(request.user).data
        return Response({"success": True, "data": data})


@extend_schema(summary="My wallet transactions", tags=["Wallet"])
class WalletTransactionListView(generics.ListAPIView):
    serializer_class = WalletTransactionSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return WalletTransaction.objects.filter(user=self.request.user)


class WithdrawalRequestView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Request a withdrawal of pending earnings",
        request=WithdrawalRequestSerializer,
        responses={201: WalletTransactionSerializer},
        tags=["Wallet"],
    )
    def post(self, request):
        serializer = WithdrawalRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        withdrawal = WalletService.request_withdrawal(
            request.user,
            serializer.validated_data["amount"],
            serializer.validated_data["bank_details"],
        )
        notify_admins("notify_new_withdrawal_request", withdrawal)
        return Response(
            {
                "success": True,
                "message": "Withdrawal request submitted",
                "data": WalletTransactionSerializer(withdrawal).data,
            },
            status=status.HTTP_201_CREATED,
        )


@extend_schema(
    summary="Withdrawal requests (admin)",
    parameters=[OpenApiParameter("status", str, required=False)],
    tags=["Wallet"],
)
class AdminWithdrawalListView(generics.ListAPIView):
    serializer_class = WithdrawalRequestDetailSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return WalletService.pending_withdrawals(self.request.query_params.get("status"))


class AdminWithdrawalProcessView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    @extend_schema(
        summary="Approve or reject a withdrawal request (admin)",
        request=ProcessWithdrawalSerializer,
        responses={200: WithdrawalRequestDetailSerializer},
        tags=["Wallet"],
    )
    def put(self, request, pk):
        serializer = ProcessWithdrawalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        withdrawal, approved = WalletService.process_withdrawal(
            pk,
            serializer.validated_data["action"],
            serializer.validated_data["admin_notes"],
            request.user,
        )
        if approved:
            notify_admins("notify_wallet_transaction", withdrawal)
        notify_admins("notify_withdrawal_update", withdrawal)
        return Response(
            {
                "success": True,
                "message": f"Withdrawal request {withdrawal.withdrawal_status}",
                "data": WithdrawalRequestDetailSerializer(withdrawal).data,
            }
        )


class EarningsSummaryView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Earnings totals and breakdown by source",
        responses={200: EarningsSummarySerializer},
        tags=["Wallet"],
    )
    def get(self, request):
        summary = WalletService.earnings_summary(request.user)
        return Response(
            {"success": True, "data": EarningsSummarySerializer(summary).data}
        )


class PlatformSummaryView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    @extend_schema(
        summary="Platform commission, lender earnings and withdrawals (admin)",
        responses={200: PlatformSummarySerializer},
        tags=["Wallet"],
    )
    def get(self, request):
        summary = WalletService.platform_summary()
        return Response(
            {"success": True, "data": PlatformSummarySerializer(summary).data}
        )


@extend_schema(summary="All wallet transactions (admin)", tags=["Wallet"])
class AdminTransactionListView(generics.ListAPIView):
    queryset = WalletTransaction.objects.select_related("user")
    serializer_class = WithdrawalRequestDetailSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = WalletTransactionFilter
    search_fields = ["user__username", "user__email", "description"]
    ordering_fields = ["created_at", "amount"]
    ordering = ["-created_at"]


class BalanceAdjustmentView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    @extend_schema(
        summary="Credit or debit a user's earnings (admin)",
        request=BalanceAdjustmentSerializer,
        tags=["Wallet"],
    )
    def post(self, request):
        serializer = BalanceAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        adjustment = WalletService.adjust_balance(
            data["user_id"], data["amount"], data["type"], data["reason"], request.user
        )
        notify_admins("notify_wallet_transaction", adjustment)
        return Response(
            {
                "success": True,
                "message": f"Wallet {adjustment.type}ed successfully",
                "data": {
                    "transaction_id": adjustment.id,
                    "new_balance": str(adjustment.balance_after),
                    "amount": str(adjustment.amount),
                    "type": adjustment.type,
                },
            }
        )
