"""Hierarchy-aware handler tables.

A :class:`HandlerTable` maps kinds to handler functions. Looking up a kind
returns the handler registered for the closest ancestor-or-self of that kind,
so each table only registers the kinds it cares about, at whatever level of
abstraction suits it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from tally.hierarchy import Hierarchy
from tally.hierarchy import hierarchy as default_hierarchy


F = TypeVar("F", bound=Callable[..., Any])


def _noop(*args: Any, **kwargs: Any) -> None:
    return None


class HandlerTable:
    """An open dispatch table keyed by kind.

    Usage:

        progress = HandlerTable("progress")

        @progress.register("pass")
        def _pass(event): ...

        progress.resolve(event.kind)(event)
    """

    def __init__(
        self,
        name: str,
        *,
        hierarchy: Hierarchy | None = None,
        default: Callable[..., Any] | None = None,
    ) -> None:
        self.name = name
        self.hierarchy = hierarchy
        self.default = default or _noop
        self._handlers: dict[str, Callable[..., Any]] = {}

    def register(self, tag: str) -> Callable[[F], F]:
        """Decorator registering the wrapped function for ``tag``.

        Re-registering a tag replaces its handler but keeps its original
        position for tie-breaking.
        """

        def decorator(fn: F) -> F:
            self._handlers[str(tag)] = fn
            return fn

        return decorator

    def set_default(self, fn: F) -> F:
        """Decorator replacing the fallback handler."""
        self.default = fn
        return fn

    def unregister(self, tag: str) -> None:
        self._handlers.pop(str(tag), None)

    def registered(self) -> tuple[str, ...]:
        """Registered tags in registration order."""
        return tuple(self._handlers)

    def _match(self, kind: str, hierarchy: Hierarchy | None) -> str | None:
        graph = hierarchy or self.hierarchy or default_hierarchy
        distances = graph.distances(kind)
        best: str | None = None
        best_distance = 0
        for tag in self._handlers:
            distance = distances.get(tag)
            if distance is None:
                continue
            if best is None or distance < best_distance:
                best, best_distance = tag, distance
        return best

    def resolve(self, kind: str, hierarchy: Hierarchy | None = None) -> Callable[..., Any]:
        """Return the most specific handler for ``kind``, or the default.

        The closest registered ancestor-or-self wins; between equally close
        ancestors, the one registered first wins.
        """
        tag = self._match(str(kind), hierarchy)
        if tag is None:
            return self.default
        return self._handlers[tag]

    def handles(self, kind: str, hierarchy: Hierarchy | None = None) -> bool:
        """True when a non-default handler matches ``kind``."""
        return self._match(str(kind), hierarchy) is not None

    def __call__(self, event: Any, *args: Any) -> Any:
        """Dispatch on ``event.kind`` and call the handler with all arguments."""
        return self.resolve(event.kind)(event, *args)

    def __repr__(self) -> str:
        return f"HandlerTable({self.name!r}, tags={list(self._handlers)!r})"


__all__ = ["HandlerTable"]
