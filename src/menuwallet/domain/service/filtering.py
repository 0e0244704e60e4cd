"""Domain service: filter predicate evaluation.

Pure functions: records and criteria in, a new list out. Every active
criterion must hold for a record to survive, and survivors keep their
input order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.criteria import FilterCriteria
from menuwallet.domain.service.record_fields import RecordFields

T = TypeVar("T")


def apply_filter(
    records: Iterable[T],
    criteria: FilterCriteria,
    fields: RecordFields,
) -> list[T]:
    """Return the records matching *criteria*, in their original order.

    Raises ValidationError if *criteria* constrains something the record
    type does not have (e.g. a date range on menu items).
    """
    predicates = build_predicates(criteria, fields)
    return [record for record in records if all(p(record) for p in predicates)]


def build_predicates(
    criteria: FilterCriteria,
    fields: RecordFields,
) -> list[Callable[[Any], bool]]:
    """Translate the active parts of *criteria* into record predicates."""
    predicates: list[Callable[[Any], bool]] = []

    query = criteria.normalized_query
    if query is not None:
        if not fields.text:
            raise _unsupported(fields, "text search")
        predicates.append(_text_predicate(query, fields))

    if criteria.category is not None:
        if fields.category is None:
            raise _unsupported(fields, "category")
        get_category = fields.category
        wanted = criteria.category
        predicates.append(lambda record: get_category(record) == wanted)

    if criteria.has_date_filter:
        if fields.date is None:
            raise _unsupported(fields, "date range")
        predicates.append(_range_predicate(fields.date, criteria.start, criteria.end))

    if criteria.has_amount_filter:
        if fields.amount is None:
            raise _unsupported(fields, "amount range")
        predicates.append(
            _range_predicate(fields.amount, criteria.min_amount, criteria.max_amount)
        )

    for flag in sorted(criteria.flags):
        get_flag = fields.flags.get(flag)
        if get_flag is None:
            raise ValidationError(f"Unknown filter '{flag}' for {fields.entity}")
        predicates.append(lambda record, get_flag=get_flag: bool(get_flag(record)))

    return predicates


# --- Predicate builders -------------------------------------------------------


def _text_predicate(query: str, fields: RecordFields) -> Callable[[Any], bool]:
    def matches(record: Any) -> bool:
        for get_text in fields.text:
            value = get_text(record)
            if value and query in value.lower():
                return True
        return False

    return matches


def _range_predicate(get_value, low, high) -> Callable[[Any], bool]:
    """Inclusive bounds; records without a value never match."""

    def matches(record: Any) -> bool:
        value = get_value(record)
        if value is None:
            return False
        if low is not None and value < low:
            return False
        if high is not None and value > high:
            return False
        return True

    return matches


def _unsupported(fields: RecordFields, what: str) -> ValidationError:
    return ValidationError(f"Cannot filter {fields.entity} by {what}")
