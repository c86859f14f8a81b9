"""Outline-style reporter that prints suites, groups, tests and contexts."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import zip_longest
from typing import TYPE_CHECKING

from rich.console import Console

from tally.dispatch import HandlerTable
from tally.output import colored, println, write, write_text
from tally.reports.base import EventHandler
from tally.types import Kind

if TYPE_CHECKING:
    from tally.context import ReportRun
    from tally.events import Event


_MARGIN = "    "
_INDENT = "  "
_MISSING = object()


class ContextDiffRenderer:
    """Prints only the "testing ..." frames that were not printed last time.

    Stacks are most-recent-first, as carried on events. The renderer keeps a
    single snapshot of the last stack it saw and re-derives the difference on
    every call, so revisiting a frame after leaving it prints it again.
    """

    def __init__(self, console: Console) -> None:
        self.console = console
        self.previous: tuple[str, ...] = ()

    def reset(self) -> None:
        self.previous = ()

    def new_frames(self, current: Sequence[str]) -> tuple[int, list[str]]:
        """Return the shared depth and the frames below it, outermost first."""
        outer_first = list(reversed(current))
        shared = 0
        for before, now in zip_longest(reversed(self.previous), outer_first, fillvalue=_MISSING):
            if now is _MISSING or before != now:
                break
            shared += 1
        return shared, outer_first[shared:]

    def render(self, current: Sequence[str]) -> list[str]:
        """Print the new frames of ``current`` and remember it."""
        shared, frames = self.new_frames(current)
        for offset, frame in enumerate(frames):
            nesting = shared + offset
            write_text(self.console, f"\n{_MARGIN}{_INDENT * nesting}{frame}")
        self.previous = tuple(current)
        return frames


class Documentation(EventHandler):
    """Narrates the run: suite banners, group and test names, nested
    contexts, and a FAIL/ERROR marker after failing assertions."""

    table = HandlerTable("documentation")

    def __init__(self, run: ReportRun) -> None:
        super().__init__(run)
        self.contexts = ContextDiffRenderer(run.console)

    @staticmethod
    def _desc(event: Event) -> str | None:
        if event.testable is not None and event.testable.desc:
            return event.testable.desc
        return event.var

    @table.register(Kind.BEGIN_TEST_SUITE)
    def _begin_suite(self, event: Event) -> None:
        self.contexts.reset()
        write_text(self.console, f"--- {self._desc(event) or ''} ---------------------------")

    @table.register(Kind.BEGIN_GROUP)
    def _begin_group(self, event: Event) -> None:
        self.contexts.reset()
        write_text(self.console, f"\n{self._desc(event) or ''}")

    @table.register(Kind.END_GROUP)
    def _end_group(self, event: Event) -> None:
        println(self.console)

    @table.register(Kind.BEGIN_TEST)
    def _begin_test(self, event: Event) -> None:
        write_text(self.console, f"\n  {self._desc(event) or ''}")

    @table.register(Kind.PASS)
    def _pass(self, event: Event) -> None:
        self.contexts.render(event.testing_contexts)

    @table.register(Kind.ERROR)
    def _error(self, event: Event) -> None:
        self.contexts.render(event.testing_contexts)
        write(self.console, colored("red", " ERROR"))

    @table.register(Kind.FAIL_TYPE)
    def _fail(self, event: Event) -> None:
        self.contexts.render(event.testing_contexts)
        write(self.console, colored("red", " FAIL"))

    @table.register(Kind.SUMMARY)
    def _summary(self, event: Event) -> None:
        println(self.console)
