"""Typed aggregates shown on the wallet overview cards."""

from __future__ import annotations

from dataclasses import dataclass

from menuwallet.domain.model.transaction import TransactionType
from menuwallet.domain.model.value_objects import Money


@dataclass(frozen=True)
class TypeTotal:
    transaction_type: TransactionType
    count: int
    total: Money


@dataclass(frozen=True)
class WalletSummary:
    """Totals over a set of transactions.

    ``total_debits`` is reported as a positive amount; ``net`` is credits
    minus debits.
    """

    transaction_count: int
    total_credits: Money
    total_debits: Money
    net: Money
    total_fees: Money
    pending_count: int
    by_type: tuple[TypeTotal, ...] = ()
