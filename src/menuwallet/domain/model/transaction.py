"""Driver wallet transactions.

Transactions are read-only from the point of view of this package: they
are produced by the wallet backend and only filtered, sorted, summarised
and exported here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.value_objects import Money


class TransactionType(Enum):
    DELIVERY_EARNINGS = "delivery_earnings"
    TIP_PAYMENT = "tip_payment"
    COMPLETION_BONUS = "completion_bonus"
    PERFORMANCE_BONUS = "performance_bonus"
    FUEL_ALLOWANCE = "fuel_allowance"
    WITHDRAWAL_REQUEST = "withdrawal_request"
    BANK_TRANSFER = "bank_transfer"
    EWALLET_PAYOUT = "ewallet_payout"
    ADJUSTMENT = "adjustment"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_credit(self) -> bool:
        return self in _CREDIT_TYPES

    @property
    def is_debit(self) -> bool:
        return self in _DEBIT_TYPES


_DISPLAY_NAMES = {
    TransactionType.DELIVERY_EARNINGS: "Delivery Earnings",
    TransactionType.TIP_PAYMENT: "Tip",
    TransactionType.COMPLETION_BONUS: "Completion Bonus",
    TransactionType.PERFORMANCE_BONUS: "Performance Bonus",
    TransactionType.FUEL_ALLOWANCE: "Fuel Allowance",
    TransactionType.WITHDRAWAL_REQUEST: "Withdrawal",
    TransactionType.BANK_TRANSFER: "Bank Transfer",
    TransactionType.EWALLET_PAYOUT: "E-Wallet Payout",
    TransactionType.ADJUSTMENT: "Adjustment",
}

_CREDIT_TYPES = frozenset({
    TransactionType.DELIVERY_EARNINGS,
    TransactionType.TIP_PAYMENT,
    TransactionType.COMPLETION_BONUS,
    TransactionType.PERFORMANCE_BONUS,
    TransactionType.FUEL_ALLOWANCE,
})

_DEBIT_TYPES = frozenset({
    TransactionType.WITHDRAWAL_REQUEST,
    TransactionType.BANK_TRANSFER,
    TransactionType.EWALLET_PAYOUT,
})


@dataclass
class WalletTransaction:
    """A single movement on a driver's wallet.

    Use ``WalletTransaction.create()`` for records that need validating;
    the plain ``__init__`` lets repositories reconstitute stored rows.

    Invariant: the sign of ``amount`` matches the credit/debit
    classification of ``transaction_type``. Adjustments may go either
    way but are never zero.
    """

    id: str
    driver_id: str
    transaction_type: TransactionType
    amount: Money
    created_at: datetime
    processed_at: datetime | None = None
    description: str | None = None
    reference_id: str | None = None
    processing_fee: Money = field(default_factory=Money.zero)
    balance_before: Money | None = None
    balance_after: Money | None = None

    @staticmethod
    def create(
        id: str,
        driver_id: str,
        transaction_type: TransactionType,
        amount: Money,
        created_at: datetime,
        **extra,
    ) -> WalletTransaction:
        """Build a transaction, enforcing the sign invariant."""
        if amount.is_zero:
            raise ValidationError("Transaction amount cannot be zero")
        if transaction_type.is_credit and amount.is_negative:
            raise ValidationError(
                f"{transaction_type.display_name} must be a credit, got {amount}"
            )
        if transaction_type.is_debit and amount.is_positive:
            raise ValidationError(
                f"{transaction_type.display_name} must be a debit, got {amount}"
            )
        fee = extra.get("processing_fee")
        if fee is not None and fee.is_negative:
            raise ValidationError("Processing fee cannot be negative")
        return WalletTransaction(
            id=id,
            driver_id=driver_id,
            transaction_type=transaction_type,
            amount=amount,
            created_at=created_at,
            **extra,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def is_credit(self) -> bool:
        return self.amount.is_positive

    @property
    def is_debit(self) -> bool:
        return self.amount.is_negative

    @property
    def is_processed(self) -> bool:
        return self.processed_at is not None

    @property
    def is_pending(self) -> bool:
        return self.processed_at is None

    @property
    def status(self) -> str:
        return "Completed" if self.is_processed else "Pending"
