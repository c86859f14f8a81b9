"""Assertion counters, kept separate from any output."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from tally.dispatch import HandlerTable
from tally.reports.base import EventHandler
from tally.types import Kind

if TYPE_CHECKING:
    from tally.context import ReportRun
    from tally.events import Event


COUNTER_KEYS = ("test", "pass", "fail", "error", "pending")


class Counters:
    """Non-negative per-outcome tallies for one run."""

    def __init__(self) -> None:
        self._counts = dict.fromkeys(COUNTER_KEYS, 0)
        self._lock = threading.Lock()

    def increment(self, key: str) -> None:
        if key not in self._counts:
            return
        with self._lock:
            self._counts[key] += 1

    def __getitem__(self, key: str) -> int:
        with self._lock:
            return self._counts[key]

    def as_dict(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    @property
    def failed(self) -> bool:
        with self._lock:
            return self._counts["fail"] + self._counts["error"] > 0

    def __repr__(self) -> str:
        return f"Counters({self.as_dict()!r})"


class CounterHandler(EventHandler):
    """Increments :class:`Counters` from pass, failure, error and pending events."""

    table = HandlerTable("counters")

    def __init__(self, run: ReportRun, counters: Counters | None = None) -> None:
        super().__init__(run)
        self.counters = counters if counters is not None else Counters()

    @table.register(Kind.BEGIN_TEST)
    def _begin_test(self, event: Event) -> None:
        self.counters.increment("test")

    @table.register(Kind.PASS)
    def _pass(self, event: Event) -> None:
        self.counters.increment("pass")

    @table.register(Kind.FAIL_TYPE)
    def _fail(self, event: Event) -> None:
        self.counters.increment("fail")

    @table.register(Kind.ERROR)
    def _error(self, event: Event) -> None:
        self.counters.increment("error")

    @table.register(Kind.PENDING)
    def _pending(self, event: Event) -> None:
        self.counters.increment("pending")
