"""Domain service: ordering record lists by a selectable key.

Sorting is always stable in both directions so repeated sorts over the
same data never shuffle rows that compare equal.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from menuwallet.domain.exceptions import ValidationError
from menuwallet.domain.model.criteria import FilterCriteria, SortKey
from menuwallet.domain.service.record_fields import RecordFields

T = TypeVar("T")


def sort_records(
    records: Iterable[T],
    key: SortKey,
    ascending: bool,
    fields: RecordFields,
) -> list[T]:
    """Return a new list ordered by *key*; the input is left untouched.

    Strings compare case-sensitively. Records with no value for *key*
    go last whichever way the list is sorted.
    """
    get_value = fields.sort_keys.get(key)
    if get_value is None:
        raise ValidationError(f"Cannot sort {fields.entity} by {key.value}")

    present: list[T] = []
    missing: list[T] = []
    for record in records:
        (missing if get_value(record) is None else present).append(record)

    # ``reverse=True`` keeps equal elements in their original order.
    present.sort(key=get_value, reverse=not ascending)
    return present + missing


def order_records(
    records: Iterable[T],
    criteria: FilterCriteria,
    fields: RecordFields,
) -> list[T]:
    """Apply the user's sort choice, or the record type's default order."""
    if criteria.sort_key is not None:
        return sort_records(records, criteria.sort_key, criteria.ascending, fields)

    ordered = list(records)
    # Sort by the least significant key first; stability does the rest.
    for key, ascending in reversed(fields.default_order):
        ordered = sort_records(ordered, key, ascending, fields)
    return ordered
