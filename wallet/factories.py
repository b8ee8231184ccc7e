# wallet/factories.py
from decimal import Decimal

import factory

from users.factories import UserFactory
from .models import WalletTransaction


class WithdrawalRequestFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = WalletTransaction

    user = factory.SubFactory(UserFactory, pending_earnings=Decimal("500.00"))
    type = WalletTransaction.TYPE_DEBIT
    source = WalletTransaction.SOURCE_WITHDRAWAL
    amount = Decimal("200.00")
    description = "Withdrawal request"
    balance_after = factory.SelfAttribute("user.pending_earnings")
    metadata = factory.LazyFunction(
        lambda: {
            "status": WalletTransaction.WITHDRAWAL_PENDING,
            "bank_details": {
                "account_number": "000123456789",
                "ifsc_code": "HDFC0001234",
                "account_holder_name": "Test Reader",
            },
        }
    )


class CreditTransactionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = WalletTransaction

    user = factory.SubFactory(UserFactory)
    type = WalletTransaction.TYPE_CREDIT
    source = "lending_fee"
    amount = Decimal("50.00")
    description = "Lending fee"
    balance_after = Decimal("50.00")
    metadata = factory.LazyFunction(dict)
