"""Domain service: bulk-selection bookkeeping.

``SelectionSet`` keeps the ids a user has checked, in the order they were
checked. The order matters where it is meaningful to the user (templates
are applied in selection order) and is otherwise harmless.

Selections deliberately survive re-filtering: ``select_all`` only adds,
and ids hidden by the current filter stay selected. Ids are dropped only
by ``prune`` when the underlying data set itself changes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from menuwallet.domain.model.ordering import move_item

T = TypeVar("T")


class SelectionSet:

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: list[str] = []
        for id_ in ids:
            if id_ not in self._ids:
                self._ids.append(id_)

    # --- Mutations ------------------------------------------------------------

    def toggle(self, id_: str) -> bool:
        """Add *id_* if absent, remove it if present. Returns the new state."""
        if id_ in self._ids:
            self._ids.remove(id_)
            return False
        self._ids.append(id_)
        return True

    def select_all(self, candidate_ids: Iterable[str]) -> None:
        """Add every candidate not already selected; never removes anything."""
        for id_ in candidate_ids:
            if id_ not in self._ids:
                self._ids.append(id_)

    def clear(self) -> None:
        self._ids.clear()

    def prune(self, candidate_ids: Iterable[str]) -> list[str]:
        """Drop ids that are no longer in the data set. Returns the dropped ids."""
        keep = set(candidate_ids)
        dropped = [id_ for id_ in self._ids if id_ not in keep]
        self._ids = [id_ for id_ in self._ids if id_ in keep]
        return dropped

    def reorder(self, old_index: int, new_index: int) -> None:
        move_item(self._ids, old_index, new_index)

    # --- Queries --------------------------------------------------------------

    def contains(self, id_: str) -> bool:
        return id_ in self._ids

    def count(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    def ordered(self, records: Iterable[T], get_id: Callable[[Any], str]) -> list[T]:
        """Return the selected records in selection order."""
        by_id = {get_id(record): record for record in records}
        return [by_id[id_] for id_ in self._ids if id_ in by_id]

    def copy(self) -> SelectionSet:
        return SelectionSet(self._ids)

    def __contains__(self, id_: object) -> bool:
        return id_ in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self):
        return iter(tuple(self._ids))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectionSet):
            return NotImplemented
        return set(self._ids) == set(other._ids)

    def __repr__(self) -> str:
        return f"SelectionSet({self._ids!r})"
