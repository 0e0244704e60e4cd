"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum

from menuwallet.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "MYR"

_CURRENCY_SYMBOLS = {"MYR": "RM"}
_THOUSANDS = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d*)?$")


@dataclass(frozen=True)
class Money:
    """Signed monetary amount with currency.

    Wallet debits are stored as negative amounts, so unlike catalog
    prices a Money value may be below zero. Callers that need a
    non-negative amount (menu prices, option surcharges) check it
    themselves.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __neg__(self) -> Money:
        return Money(-self.amount, self.currency)

    def __abs__(self) -> Money:
        return Money(abs(self.amount), self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        symbol = _CURRENCY_SYMBOLS.get(self.currency, self.currency)
        sign = "-" if self.amount < 0 else ""
        return f"{sign}{symbol} {abs(self.amount):.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount).strip()), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0.00"), currency)


def parse_amount(raw: str | None) -> Decimal | None:
    """Parse user-typed amount text for a filter bound.

    Empty or unparseable input means "no constraint" and yields None
    rather than raising. A leading currency symbol is tolerated, and so
    are commas, but only as thousands separators ("1,250.00"); "5,5" is
    malformed rather than fifty-five.
    """
    if raw is None:
        return None
    text = raw.strip()
    for symbol in _CURRENCY_SYMBOLS.values():
        if text.upper().startswith(symbol.upper()):
            text = text[len(symbol):].strip()
    if not text:
        return None
    if "," in text:
        if not _THOUSANDS.match(text):
            return None
        text = text.replace(",", "")
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


# ---------------------------------------------------------------------------
# Date ranges
# ---------------------------------------------------------------------------


class Period(Enum):
    """Quick date presets offered by the wallet history screen."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEK = "week"
    MONTH = "month"
    LAST_30 = "last30"
    LAST_90 = "last90"
    YEAR = "year"
    ALL = "all"

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]


_PERIOD_LABELS = {
    Period.TODAY: "Today",
    Period.YESTERDAY: "Yesterday",
    Period.WEEK: "Last 7 Days",
    Period.MONTH: "This Month",
    Period.LAST_30: "Last 30 Days",
    Period.LAST_90: "Last 90 Days",
    Period.YEAR: "This Year",
    Period.ALL: "All Time",
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; either bound may be open (None)."""

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValidationError(
                f"Date range start {self.start:%Y-%m-%d} is after end {self.end:%Y-%m-%d}"
            )

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, moment: datetime) -> bool:
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment > self.end:
            return False
        return True

    @staticmethod
    def for_period(period: Period, now: datetime) -> DateRange:
        """Resolve a preset relative to *now*.

        Only ``YESTERDAY`` has an upper bound; every other preset runs
        from its start up to whatever is newest.
        """
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

        if period is Period.TODAY:
            return DateRange(start=midnight)
        if period is Period.YESTERDAY:
            start = midnight - timedelta(days=1)
            return DateRange(start=start, end=midnight - timedelta(microseconds=1))
        if period is Period.WEEK:
            return DateRange(start=now - timedelta(days=7))
        if period is Period.MONTH:
            return DateRange(start=midnight.replace(day=1))
        if period is Period.LAST_30:
            return DateRange(start=now - timedelta(days=30))
        if period is Period.LAST_90:
            return DateRange(start=now - timedelta(days=90))
        if period is Period.YEAR:
            return DateRange(start=midnight.replace(month=1, day=1))
        return DateRange()
