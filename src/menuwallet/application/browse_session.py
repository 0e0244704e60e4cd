"""Application service: state behind one list screen.

A ``BrowseSession`` lives as long as the screen that owns it. It reads
records through an injected loader, keeps the user's filter, sort and
selection, and reports every change through the callbacks the screen
passes in. Filtering and sorting themselves are the pure domain services;
the session only decides when to run them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from menuwallet.domain.exceptions import DataSourceError, ValidationError
from menuwallet.domain.model.criteria import FilterCriteria, SortKey, SortOrder
from menuwallet.domain.service.filtering import apply_filter
from menuwallet.domain.service.record_fields import RecordFields
from menuwallet.domain.service.selection import SelectionSet
from menuwallet.domain.service.sorting import order_records

log = logging.getLogger(__name__)

T = TypeVar("T")

# (on_search, on_clear) -> object with changed/submit/clear/reset/close
SearchFactory = Callable[[Callable[[str], None], Callable[[], None]], Any]


class BrowseSession(Generic[T]):

    def __init__(
        self,
        loader: Callable[[], list[T]],
        fields: RecordFields,
        criteria: FilterCriteria | None = None,
        on_criteria: Callable[[FilterCriteria], None] | None = None,
        on_selection: Callable[[SelectionSet], None] | None = None,
        on_sort: Callable[[SortOrder], None] | None = None,
        search_factory: SearchFactory | None = None,
    ) -> None:
        self._loader = loader
        self._fields = fields
        self._criteria = criteria or FilterCriteria()
        self._on_criteria = on_criteria
        self._on_selection = on_selection
        self._on_sort = on_sort
        self._selection = SelectionSet()
        self._records: list[T] = []
        self._closed = False
        self.error: str | None = None
        self._search = (
            search_factory(self._apply_query, self._reset_query) if search_factory else None
        )
        self.reload()

    # --- Data -----------------------------------------------------------------

    def reload(self) -> bool:
        """Re-read records from the loader.

        On a data-source failure the previous records stay in place and
        the message is kept in ``error`` for display. Returns True when
        fresh records were loaded.
        """
        try:
            records = list(self._loader())
        except DataSourceError as exc:
            self.error = str(exc)
            log.warning("Could not load %s: %s", self._fields.entity, exc)
            return False

        self._records = records
        self.error = None
        dropped = self._selection.prune(self._fields.id(r) for r in records)
        if dropped:
            log.debug("Pruned %d stale selection(s)", len(dropped))
            self._notify_selection()
        return True

    @property
    def records(self) -> list[T]:
        return list(self._records)

    def visible(self) -> list[T]:
        """Records that pass the current criteria, in display order."""
        matched = apply_filter(self._records, self._criteria, self._fields)
        return order_records(matched, self._criteria, self._fields)

    # --- Filtering ------------------------------------------------------------

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    def set_criteria(self, criteria: FilterCriteria) -> None:
        # Validate against this record type before accepting.
        apply_filter([], criteria, self._fields)
        order_records([], criteria, self._fields)
        self._criteria = criteria
        self._notify_criteria()

    def clear_filters(self) -> None:
        """Drop every constraint, pending search text included, in one change."""
        if self._search is not None:
            self._search.reset()
        self.set_criteria(self._criteria.cleared())

    def type_query(self, text: str) -> None:
        """Feed a keystroke; the query applies once typing pauses."""
        if self._search is not None:
            self._search.changed(text)
        else:
            self._apply_query(text)

    def submit_query(self, text: str | None = None) -> None:
        if self._search is not None:
            self._search.submit(text)
        elif text is not None:
            self._apply_query(text)

    def clear_query(self) -> None:
        if self._search is not None:
            self._search.clear()
        else:
            self._reset_query()

    # --- Sorting --------------------------------------------------------------

    @property
    def sort_order(self) -> SortOrder | None:
        """The explicit sort, else the record type's primary default."""
        if self._criteria.sort_order is not None:
            return self._criteria.sort_order
        if self._fields.default_order:
            key, ascending = self._fields.default_order[0]
            return SortOrder(key, ascending)
        return None

    def choose_sort(self, key: SortKey) -> SortOrder:
        current = self.sort_order
        order = current.select(key) if current is not None else SortOrder(key)
        self.set_criteria(self._criteria.with_sort(order))
        if self._on_sort is not None:
            self._on_sort(order)
        return order

    # --- Selection ------------------------------------------------------------

    @property
    def selection(self) -> SelectionSet:
        return self._selection.copy()

    def toggle(self, id_: str) -> bool:
        """Select or deselect one record.

        Only records currently shown may be added; an id that is unknown
        or hidden by the filter raises ValidationError. Deselecting always
        works, hidden or not.
        """
        if id_ not in self._selection:
            shown = {self._fields.id(r) for r in self.visible()}
            if id_ not in shown:
                known = any(self._fields.id(r) == id_ for r in self._records)
                reason = "is hidden by the current filter" if known else "does not exist"
                raise ValidationError(
                    f"Cannot select '{id_}' from {self._fields.entity}: it {reason}"
                )
        selected = self._selection.toggle(id_)
        self._notify_selection()
        return selected

    def select_all_visible(self) -> None:
        self._selection.select_all(self._fields.id(r) for r in self.visible())
        self._notify_selection()

    def clear_selection(self) -> None:
        self._selection.clear()
        self._notify_selection()

    def reorder_selection(self, old_index: int, new_index: int) -> None:
        self._selection.reorder(old_index, new_index)
        self._notify_selection()

    def selected_records(self) -> list[T]:
        """Selected records in selection order, including filtered-out ones."""
        return self._selection.ordered(self._records, self._fields.id)

    # --- Lifecycle ------------------------------------------------------------

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._search is not None:
            self._search.close()

    def __enter__(self) -> BrowseSession[T]:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Internal helpers -----------------------------------------------------

    def _apply_query(self, text: str) -> None:
        if self._closed:
            return
        self.set_criteria(self._criteria.with_query(text.strip() or None))

    def _reset_query(self) -> None:
        if self._closed:
            return
        self.set_criteria(self._criteria.with_query(None))

    def _notify_criteria(self) -> None:
        if self._on_criteria is not None:
            self._on_criteria(self._criteria)

    def _notify_selection(self) -> None:
        if self._on_selection is not None:
            self._on_selection(self._selection.copy())
