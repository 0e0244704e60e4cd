"""Unit tests for wallet transactions and their sign rules."""

from datetime import datetime, timezone

import pytest

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.transaction import TransactionType, WalletTransaction
from menuwallet.domain.model.value_objects import Money

CREATED = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def _make_tx(tx_type: TransactionType, amount: str, **extra) -> WalletTransaction:
    return WalletTransaction.create(
        id="t1",
        driver_id="d1",
        transaction_type=tx_type,
        amount=Money.of(amount),
        created_at=CREATED,
        **extra,
    )


class TestTransactionType:

    def test_credit_and_debit_classification(self):
        assert TransactionType.TIP_PAYMENT.is_credit
        assert TransactionType.BANK_TRANSFER.is_debit
        assert not TransactionType.ADJUSTMENT.is_credit
        assert not TransactionType.ADJUSTMENT.is_debit

    def test_display_names(self):
        assert TransactionType.DELIVERY_EARNINGS.display_name == "Delivery Earnings"
        assert TransactionType.EWALLET_PAYOUT.display_name == "E-Wallet Payout"


class TestTransactionCreation:

    def test_credit_type_with_positive_amount(self):
        tx = _make_tx(TransactionType.DELIVERY_EARNINGS, "12.50")
        assert tx.is_credit
        assert not tx.is_debit

    def test_debit_type_with_negative_amount(self):
        tx = _make_tx(TransactionType.WITHDRAWAL_REQUEST, "-50")
        assert tx.is_debit

    def test_credit_type_with_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a credit"):
            _make_tx(TransactionType.TIP_PAYMENT, "-3")

    def test_debit_type_with_positive_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a debit"):
            _make_tx(TransactionType.BANK_TRANSFER, "30")

    def test_adjustment_may_go_either_way(self):
        assert _make_tx(TransactionType.ADJUSTMENT, "-2").is_debit
        assert _make_tx(TransactionType.ADJUSTMENT, "2").is_credit

    def test_zero_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be zero"):
            _make_tx(TransactionType.ADJUSTMENT, "0")

    def test_negative_fee_rejected(self):
        with pytest.raises(ValidationError, match="Processing fee"):
            _make_tx(
                TransactionType.BANK_TRANSFER, "-30", processing_fee=Money.of("-1")
            )

    def test_extra_fields_are_kept(self):
        tx = _make_tx(
            TransactionType.BANK_TRANSFER,
            "-30",
            processing_fee=Money.of("1.50"),
            reference_id="BT-77",
        )
        assert tx.processing_fee == Money.of("1.50")
        assert tx.reference_id == "BT-77"


class TestTransactionStatus:

    def test_unprocessed_is_pending(self):
        tx = _make_tx(TransactionType.WITHDRAWAL_REQUEST, "-10")
        assert tx.is_pending
        assert tx.status == "Pending"

    def test_processed_is_completed(self):
        tx = _make_tx(TransactionType.WITHDRAWAL_REQUEST, "-10", processed_at=CREATED)
        assert tx.is_processed
        assert tx.status == "Completed"
