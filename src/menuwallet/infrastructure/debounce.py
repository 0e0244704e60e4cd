"""Debounced search input.

The owner passes ``schedule`` and ``cancel`` callables from whatever event
loop drives the screen (Tk ``after``/``after_cancel``, or the asyncio
adapter below) so the single pending timer is tracked in one place and
cancelled when the screen goes away.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

log = logging.getLogger(__name__)

ScheduleFn = Callable[[int, Callable[[], None]], Any]
CancelFn = Callable[[Any], None]

DEFAULT_DELAY_MS = 500


class DebounceState(Enum):
    IDLE = "idle"
    PENDING = "pending"


class DebouncedSearch:
    """Coalesce rapid text changes into one search call.

    Every change supersedes the previous pending one (last write wins).
    ``close()`` cancels the pending timer and turns every later call into
    a no-op; use the instance as a context manager to guarantee that.
    """

    def __init__(
        self,
        schedule: ScheduleFn,
        cancel: CancelFn,
        on_search: Callable[[str], None],
        on_clear: Callable[[], None] | None = None,
        delay_ms: int = DEFAULT_DELAY_MS,
    ) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        self._schedule = schedule
        self._cancel = cancel
        self._on_search = on_search
        self._on_clear = on_clear
        self._delay_ms = delay_ms
        self._token: Any = None
        self._generation = 0
        self._text = ""
        self._closed = False

    # --- State ----------------------------------------------------------------

    @property
    def state(self) -> DebounceState:
        return DebounceState.PENDING if self._token is not None else DebounceState.IDLE

    @property
    def text(self) -> str:
        return self._text

    @property
    def closed(self) -> bool:
        return self._closed

    # --- Events ---------------------------------------------------------------

    def changed(self, text: str) -> None:
        """Record new input and restart the countdown."""
        if self._closed:
            return
        self._cancel_pending()
        self._text = text
        self._generation += 1
        generation = self._generation
        self._token = self._schedule(self._delay_ms, lambda: self._elapsed(generation))

    def submit(self, text: str | None = None) -> None:
        """Search right away (keyboard "search" action)."""
        if self._closed:
            return
        self._cancel_pending()
        if text is not None:
            self._text = text
        self._fire()

    def clear(self) -> None:
        """Drop pending input and reset to empty."""
        if self._closed:
            return
        self._cancel_pending()
        self._text = ""
        if self._on_clear is not None:
            self._on_clear()

    def reset(self) -> None:
        """Like ``clear()`` but silent: the owner resets its own query."""
        if self._closed:
            return
        self._cancel_pending()
        self._text = ""

    def close(self) -> None:
        if self._closed:
            return
        self._cancel_pending()
        self._closed = True
        log.debug("Debounced search closed")

    def __enter__(self) -> DebouncedSearch:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Internal helpers -----------------------------------------------------

    def _elapsed(self, generation: int) -> None:
        # A timer that was superseded or outlived its owner must not fire.
        if self._closed or generation != self._generation or self._token is None:
            return
        self._token = None
        self._fire()

    def _fire(self) -> None:
        log.debug("Search fired with %r", self._text)
        self._on_search(self._text)

    def _cancel_pending(self) -> None:
        token, self._token = self._token, None
        if token is not None:
            self._generation += 1
            self._cancel(token)


def asyncio_scheduler(loop: asyncio.AbstractEventLoop) -> tuple[ScheduleFn, CancelFn]:
    """Return ``(schedule, cancel)`` backed by ``loop.call_later``."""

    def schedule(delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return loop.call_later(delay_ms / 1000, callback)

    def cancel(handle: asyncio.TimerHandle) -> None:
        handle.cancel()

    return schedule, cancel
