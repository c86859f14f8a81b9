"""Dumps the interesting fields of every event, one line each."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tally.output import println_text

if TYPE_CHECKING:
    from tally.context import ReportRun
    from tally.events import Event


DEBUG_FIELDS = ("kind", "file", "line", "var", "ns", "expected", "actual", "message", "testable", "debug")


def debug_view(event: Event) -> dict[str, Any]:
    """The fields of ``event`` worth printing, testable reduced to id and type."""
    view: dict[str, Any] = {}
    for name in DEBUG_FIELDS:
        if name != "kind" and not event.has(name):
            continue
        value = event.get(name)
        if name == "testable" and value is not None:
            value = {"id": value.id, "type": value.type}
        view[name] = value
    return view


class Debug:
    """Prints :func:`debug_view` of each event."""

    def __init__(self, run: ReportRun) -> None:
        self.run = run

    def __call__(self, event: Event) -> None:
        println_text(self.run.console, repr(debug_view(event)))
