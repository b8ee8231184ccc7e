from django.urls import path
from .views import (
    AdminTransactionListView,
    AdminWithdrawalListView,
    AdminWithdrawalProcessView,
    BalanceAdjustmentView,
    EarningsSummaryView,
    PlatformSummaryView,
    WalletSummaryView,
    WalletTransactionListView,
    WithdrawalRequestView,
)

urlpatterns = [
    path("", WalletSummaryView.as_view(), name="wallet-summary"),
    path("earnings/", EarningsSummaryView.as_view(), name="wallet-earnings"),
    path("transactions/", WalletTransactionListView.as_view(), name="wallet-transactions"),
    path("withdraw/", WithdrawalRequestView.as_view(), name="wallet-withdraw"),
    path(
        "withdrawal-requests/",
        AdminWithdrawalListView.as_view(),
        name="wallet-withdrawal-requests",
    ),
    path(
        "withdrawal-requests/<int:pk>/",
        AdminWithdrawalProcessView.as_view(),
        name="wallet-withdrawal-process",
    ),
    path(
        "platform-summary/",
        PlatformSummaryView.as_view(),
        name="wallet-platform-summary",
    ),
    path(
        "admin/all-transactions/",
        AdminTransactionListView.as_view(),
        name="wallet-admin-transactions",
    ),
    path(
        "admin/adjust-balance/",
        BalanceAdjustmentView.as_view(),
        name="wallet-adjust-balance",
    ),
]
