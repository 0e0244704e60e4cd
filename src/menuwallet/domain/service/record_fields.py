"""Per-record-type field descriptors.

Filtering and sorting are written once against a ``RecordFields``
descriptor; each screen supplies the descriptor for the records it lists.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from menuwallet.domain.model.criteria import SortKey

Getter = Callable[[Any], Any]


@dataclass(frozen=True)
class RecordFields:
    """Which attribute of a record answers each kind of criterion.

    A ``None`` getter means the record type cannot be constrained that
    way. ``default_order`` lists ``(key, ascending)`` pairs applied when
    the user has not picked a sort key; the first pair is the primary key.
    """

    entity: str
    id: Getter
    text: tuple[Getter, ...] = ()
    category: Getter | None = None
    date: Getter | None = None
    amount: Getter | None = None
    flags: Mapping[str, Getter] = field(default_factory=dict)
    sort_keys: Mapping[SortKey, Getter] = field(default_factory=dict)
    default_order: tuple[tuple[SortKey, bool], ...] = ()


TRANSACTION_FIELDS = RecordFields(
    entity="transactions",
    id=lambda t: t.id,
    text=(
        lambda t: t.description,
        lambda t: t.reference_id,
        lambda t: t.transaction_type.display_name,
    ),
    category=lambda t: t.transaction_type,
    date=lambda t: t.created_at,
    amount=lambda t: t.amount.amount,
    flags={
        "credits_only": lambda t: t.is_credit,
        "debits_only": lambda t: t.is_debit,
        "pending_only": lambda t: t.is_pending,
    },
    sort_keys={
        SortKey.DATE: lambda t: t.created_at,
        SortKey.AMOUNT: lambda t: t.amount.amount,
    },
    default_order=((SortKey.DATE, False),),
)

MENU_ITEM_FIELDS = RecordFields(
    entity="menu items",
    id=lambda m: m.id,
    text=(lambda m: m.name, lambda m: m.description),
    category=lambda m: m.category,
    amount=lambda m: m.base_price.amount,
    flags={"available_only": lambda m: m.is_available},
    sort_keys={
        SortKey.NAME: lambda m: m.name,
        SortKey.PRICE: lambda m: m.base_price.amount,
        SortKey.CATEGORY: lambda m: m.category,
    },
)

TEMPLATE_FIELDS = RecordFields(
    entity="templates",
    id=lambda t: t.id,
    text=(lambda t: t.name, lambda t: t.description),
    category=lambda t: t.category,
    date=lambda t: t.created_at,
    flags={
        "required_only": lambda t: t.is_required,
        "active_only": lambda t: t.is_active,
    },
    sort_keys={
        SortKey.NAME: lambda t: t.name,
        SortKey.USAGE: lambda t: t.usage_count,
        SortKey.DATE: lambda t: t.created_at,
    },
    default_order=((SortKey.USAGE, False), (SortKey.NAME, True)),
)

PERFORMANCE_FIELDS = RecordFields(
    entity="template metrics",
    id=lambda p: p.template_id,
    text=(lambda p: p.template_name,),
    date=lambda p: p.last_used_at,
    amount=lambda p: p.revenue.amount,
    sort_keys={
        SortKey.PERFORMANCE: lambda p: p.performance_score,
        SortKey.REVENUE: lambda p: p.revenue.amount,
        SortKey.USAGE: lambda p: p.usage_count,
        SortKey.NAME: lambda p: p.template_name,
    },
    default_order=((SortKey.PERFORMANCE, False),),
)
