"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from menuwallet.infrastructure.debounce import (
    DEFAULT_DELAY_MS,
    CancelFn,
    DebouncedSearch,
    ScheduleFn,
)
from menuwallet.infrastructure.persistence.json_menu_item_repository import (
    JsonMenuItemRepository,
)
from menuwallet.infrastructure.persistence.json_template_repository import (
    JsonTemplateRepository,
)
from menuwallet.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    override = os.getenv("MENUWALLET_DATA_DIR")
    return Path(override) if override else _DEFAULT_DATA_DIR


def debounce_delay_ms() -> int:
    raw = os.getenv("MENUWALLET_DEBOUNCE_MS", "")
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_DELAY_MS
    return value if value >= 0 else DEFAULT_DELAY_MS


def transaction_repository() -> JsonTransactionRepository:
    return JsonTransactionRepository(data_dir() / "transactions.json")


def menu_item_repository() -> JsonMenuItemRepository:
    return JsonMenuItemRepository(data_dir() / "menu_items.json")


def template_repository() -> JsonTemplateRepository:
    return JsonTemplateRepository(
        data_dir() / "templates.json",
        data_dir() / "template_performance.json",
    )


def search_factory(
    schedule: ScheduleFn,
    cancel: CancelFn,
) -> Callable[[Callable[[str], None], Callable[[], None]], DebouncedSearch]:
    """Build the ``search_factory`` a BrowseSession expects.

    Hook for screens that own an event loop: pass its timer functions
    (Tk ``after``/``after_cancel``, or ``asyncio_scheduler(loop)``). The
    line-based CLI has no such loop, so its picker applies queries on
    submit and ``MENUWALLET_DEBOUNCE_MS`` only affects embedding screens.
    """

    def build(on_search: Callable[[str], None], on_clear: Callable[[], None]) -> DebouncedSearch:
        return DebouncedSearch(
            schedule, cancel, on_search, on_clear=on_clear, delay_ms=debounce_delay_ms()
        )

    return build
