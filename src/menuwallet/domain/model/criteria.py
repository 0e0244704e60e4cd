"""Filter and sort settings for a browsing screen.

Criteria are immutable: every user interaction produces a new value,
which is what gets handed to the screen's callbacks.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.value_objects import DateRange, Period


class SortKey(Enum):
    DATE = "date"
    AMOUNT = "amount"
    NAME = "name"
    USAGE = "usage"
    PERFORMANCE = "performance"
    REVENUE = "revenue"
    PRICE = "price"
    CATEGORY = "category"


@dataclass(frozen=True)
class SortOrder:
    """Current sort column and direction."""

    key: SortKey
    ascending: bool = False

    def select(self, key: SortKey) -> SortOrder:
        """Picking the active key flips direction; a new key starts descending."""
        if key is self.key:
            return SortOrder(key, not self.ascending)
        return SortOrder(key, ascending=False)


@dataclass(frozen=True)
class FilterCriteria:
    """Optional constraints on a record list. ``None`` means unconstrained.

    ``flags`` names boolean fields that must be true (for example
    ``available_only``); which names are valid depends on the record type.
    """

    query: str | None = None
    category: Any = None
    start: datetime | None = None
    end: datetime | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    flags: frozenset[str] = field(default_factory=frozenset)
    sort_key: SortKey | None = None
    ascending: bool = False

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValidationError("Start date must be on or before end date")
        if (
            self.min_amount is not None
            and self.max_amount is not None
            and self.min_amount > self.max_amount
        ):
            raise ValidationError(
                f"Minimum amount {self.min_amount} exceeds maximum {self.max_amount}"
            )
        if not isinstance(self.flags, frozenset):
            object.__setattr__(self, "flags", frozenset(self.flags))

    # --- Queries --------------------------------------------------------------

    @property
    def normalized_query(self) -> str | None:
        if self.query is None or not self.query.strip():
            return None
        return self.query.strip().lower()

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start, self.end)

    @property
    def has_date_filter(self) -> bool:
        return self.start is not None or self.end is not None

    @property
    def has_amount_filter(self) -> bool:
        return self.min_amount is not None or self.max_amount is not None

    @property
    def sort_order(self) -> SortOrder | None:
        if self.sort_key is None:
            return None
        return SortOrder(self.sort_key, self.ascending)

    @property
    def active_count(self) -> int:
        """Number of active constraints, as shown on the filter badge."""
        count = 0
        if self.normalized_query is not None:
            count += 1
        if self.category is not None:
            count += 1
        if self.has_date_filter:
            count += 1
        if self.has_amount_filter:
            count += 1
        count += len(self.flags)
        if self.sort_key is not None:
            count += 1
        return count

    @property
    def is_active(self) -> bool:
        return self.active_count > 0

    # --- Derivations ----------------------------------------------------------

    def with_query(self, query: str | None) -> FilterCriteria:
        return replace(self, query=query)

    def with_sort(self, order: SortOrder) -> FilterCriteria:
        return replace(self, sort_key=order.key, ascending=order.ascending)

    def with_period(self, period: Period, now: datetime) -> FilterCriteria:
        date_range = DateRange.for_period(period, now)
        return replace(self, start=date_range.start, end=date_range.end)

    def cleared(self) -> FilterCriteria:
        """Drop every constraint but keep the chosen sort order."""
        return FilterCriteria(sort_key=self.sort_key, ascending=self.ascending)
