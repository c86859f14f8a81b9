"""Append-only log of every event seen in a run."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tally.events import Event


class History:
    """Ordered record of a run's events.

    Written once per event by the session and read in full when the summary
    is rendered. Entries are never replaced or removed.
    """

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._lock = threading.Lock()

    def append(self, event: Event) -> None:
        with self._lock:
            self._events.append(event)

    def snapshot(self) -> tuple[Event, ...]:
        with self._lock:
            return tuple(self._events)

    def select(self, predicate: Callable[[Event], bool]) -> list[Event]:
        """Events matching ``predicate``, in the order they were recorded."""
        return [event for event in self.snapshot() if predicate(event)]

    def __iter__(self) -> Iterator[Event]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


__all__ = ["History"]
