"""Reporter composition and the base class for table-driven handlers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, ClassVar, Protocol

from tally.context import ReportRun
from tally.dispatch import HandlerTable
from tally.types import Signal

if TYPE_CHECKING:
    from tally.events import Event


class Handler(Protocol):
    """Anything that can be handed one event.

    Returning ``Signal.ABORT`` stops the run; ``None`` and
    ``Signal.CONTINUE`` let it carry on.
    """

    def __call__(self, event: Event) -> Signal | None: ...


HandlerFactory = Callable[[ReportRun], Handler]


class EventHandler:
    """A handler whose behaviour per kind lives in a class-level table.

    Subclasses declare a :class:`HandlerTable` and register methods on it:

        class Progress(EventHandler):
            table = HandlerTable("progress")

            @table.register(Kind.PASS)
            def _pass(self, event): ...

    Each instance is bound to one :class:`ReportRun` and holds whatever state
    its concern needs, so two reporters never share state.
    """

    table: ClassVar[HandlerTable]

    def __init__(self, run: ReportRun) -> None:
        self.run = run

    @property
    def console(self):
        return self.run.console

    def __call__(self, event: Event) -> Signal | None:
        method = self.table.resolve(event.kind, self.run.hierarchy)
        return method(self, event)


class Reporter:
    """An ordered list of handlers invoked in turn for every event.

    Composition is concatenation: ``dots + fail_fast`` runs the dots handlers
    first. Handler exceptions propagate to the caller untouched.
    """

    def __init__(self, handlers: Iterable[Handler] = (), *, name: str | None = None) -> None:
        self.handlers: list[Handler] = list(handlers)
        self.name = name

    def __call__(self, event: Event) -> Signal:
        for handler in self.handlers:
            if handler(event) is Signal.ABORT:
                return Signal.ABORT
        return Signal.CONTINUE

    def __add__(self, other: Reporter) -> Reporter:
        if not isinstance(other, Reporter):
            return NotImplemented
        return Reporter([*self.handlers, *other.handlers], name=self.name or other.name)

    def __iter__(self) -> Iterator[Handler]:
        return iter(self.handlers)

    def __len__(self) -> int:
        return len(self.handlers)

    def __repr__(self) -> str:
        return f"Reporter(name={self.name!r}, handlers={len(self.handlers)})"


__all__ = ["EventHandler", "Handler", "HandlerFactory", "Reporter"]
