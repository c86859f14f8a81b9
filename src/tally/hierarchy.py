"""Is-a hierarchy over event kinds.

Handlers are registered against kinds, and a kind may derive from any number
of parents. A handler registered for an abstract kind such as ``fail-type``
therefore covers every concrete kind that derives from it:

    from tally.hierarchy import derive

    derive("mismatch", "known")      # stop legacy forwarding
    derive("mismatch", "fail-type")  # render and count as a failure
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING

from tally.errors import CycleError
from tally.types import Kind

if TYPE_CHECKING:
    from tally.events import Event


logger = logging.getLogger(__name__)


class Hierarchy:
    """A registrable derivation graph, queried reflexively and transitively."""

    def __init__(self) -> None:
        self._parents: dict[str, list[str]] = {}
        self._lock = threading.Lock()

    def derive(self, child: str, parent: str) -> None:
        """Register ``child`` is-a ``parent``.

        Raises:
            CycleError: If ``parent`` already is-a ``child``. The hierarchy is
                left unchanged.
        """
        child, parent = str(child), str(parent)
        with self._lock:
            if self.is_descendant(parent, child):
                raise CycleError(child, parent)
            parents = self._parents.setdefault(child, [])
            if parent not in parents:
                parents.append(parent)
                logger.debug("Derived %r from %r", child, parent)

    def parents(self, tag: str) -> tuple[str, ...]:
        """Direct parents of ``tag`` in registration order."""
        return tuple(self._parents.get(str(tag), ()))

    def distances(self, tag: str) -> dict[str, int]:
        """Map every ancestor-or-self of ``tag`` to its edge distance.

        Breadth-first, so each ancestor gets its shortest distance and
        ancestors at equal distance keep parent registration order.
        """
        tag = str(tag)
        seen = {tag: 0}
        queue = deque([tag])
        while queue:
            current = queue.popleft()
            for parent in self._parents.get(current, ()):
                if parent not in seen:
                    seen[parent] = seen[current] + 1
                    queue.append(parent)
        return seen

    def ancestors(self, tag: str) -> set[str]:
        """All strict ancestors of ``tag``."""
        found = set(self.distances(tag))
        found.discard(str(tag))
        return found

    def is_descendant(self, tag: str, ancestor: str) -> bool:
        """True iff ``ancestor`` is reachable from ``tag`` over zero or more edges."""
        tag, ancestor = str(tag), str(ancestor)
        if tag == ancestor:
            return True
        return ancestor in self.distances(tag)

    def tags(self) -> Iterator[str]:
        """Every tag that appears in the hierarchy."""
        seen: dict[str, None] = {}
        for child, parents in self._parents.items():
            seen.setdefault(child)
            for parent in parents:
                seen.setdefault(parent)
        return iter(seen)

    def copy(self) -> Hierarchy:
        clone = Hierarchy()
        clone._parents = {child: list(parents) for child, parents in self._parents.items()}
        return clone


def register_builtins(target: Hierarchy) -> Hierarchy:
    """Install the derivations the built-in reporters rely on."""
    target.derive(Kind.FAIL, Kind.FAIL_TYPE)
    target.derive(Kind.ERROR, Kind.FAIL_TYPE)
    for kind in (
        Kind.FAIL_TYPE,
        Kind.DEFERRED,
        Kind.PASS,
        Kind.PENDING,
        Kind.BEGIN_TEST_SUITE,
        Kind.END_TEST_SUITE,
        Kind.BEGIN_GROUP,
        Kind.END_GROUP,
        Kind.BEGIN_TEST,
        Kind.END_TEST,
        Kind.SUMMARY,
    ):
        target.derive(kind, Kind.KNOWN)
    return target


hierarchy = register_builtins(Hierarchy())


def derive(child: str, parent: str) -> None:
    """Register ``child`` is-a ``parent`` in the process-wide hierarchy."""
    hierarchy.derive(child, parent)


def is_descendant(tag: str, ancestor: str) -> bool:
    """Query the process-wide hierarchy."""
    return hierarchy.is_descendant(tag, ancestor)


def _kind(event_or_kind: Event | str) -> str:
    return str(getattr(event_or_kind, "kind", event_or_kind))


def is_known(event_or_kind: Event | str, within: Hierarchy | None = None) -> bool:
    return (within or hierarchy).is_descendant(_kind(event_or_kind), Kind.KNOWN)


def is_fail_type(event_or_kind: Event | str, within: Hierarchy | None = None) -> bool:
    return (within or hierarchy).is_descendant(_kind(event_or_kind), Kind.FAIL_TYPE)


def is_error_type(event_or_kind: Event | str, within: Hierarchy | None = None) -> bool:
    return (within or hierarchy).is_descendant(_kind(event_or_kind), Kind.ERROR)


def is_pass(event_or_kind: Event | str, within: Hierarchy | None = None) -> bool:
    return (within or hierarchy).is_descendant(_kind(event_or_kind), Kind.PASS)


def is_pending(event_or_kind: Event | str, within: Hierarchy | None = None) -> bool:
    return (within or hierarchy).is_descendant(_kind(event_or_kind), Kind.PENDING)


def is_deferred(event_or_kind: Event | str, within: Hierarchy | None = None) -> bool:
    return (within or hierarchy).is_descendant(_kind(event_or_kind), Kind.DEFERRED)


__all__ = [
    "Hierarchy",
    "derive",
    "hierarchy",
    "is_deferred",
    "is_descendant",
    "is_error_type",
    "is_fail_type",
    "is_known",
    "is_pass",
    "is_pending",
    "register_builtins",
]
