"""Domain service: wallet totals for the overview cards."""

from __future__ import annotations

from collections.abc import Iterable

from menuwallet.domain.model.summary import TypeTotal, WalletSummary
from menuwallet.domain.model.transaction import TransactionType, WalletTransaction
from menuwallet.domain.model.value_objects import DEFAULT_CURRENCY, Money


def summarize(
    transactions: Iterable[WalletTransaction],
    currency: str = DEFAULT_CURRENCY,
) -> WalletSummary:
    """Aggregate *transactions* into a ``WalletSummary``.

    All transactions must share one currency; mixing currencies raises
    ValidationError through Money arithmetic. *currency* only matters
    for an empty input.
    """
    transactions = list(transactions)
    if transactions:
        currency = transactions[0].amount.currency

    credits = Money.zero(currency)
    debits = Money.zero(currency)
    fees = Money.zero(currency)
    pending = 0
    counts: dict[TransactionType, int] = {}
    totals: dict[TransactionType, Money] = {}

    for tx in transactions:
        if tx.is_credit:
            credits = credits + tx.amount
        elif tx.is_debit:
            debits = debits + abs(tx.amount)
        fees = fees + tx.processing_fee
        if tx.is_pending:
            pending += 1
        kind = tx.transaction_type
        counts[kind] = counts.get(kind, 0) + 1
        totals[kind] = totals.get(kind, Money.zero(currency)) + tx.amount

    by_type = sorted(
        (TypeTotal(kind, counts[kind], totals[kind]) for kind in counts),
        key=lambda t: abs(t.total.amount),
        reverse=True,
    )

    return WalletSummary(
        transaction_count=len(transactions),
        total_credits=credits,
        total_debits=debits,
        net=credits - debits,
        total_fees=fees,
        pending_count=pending,
        by_type=tuple(by_type),
    )
