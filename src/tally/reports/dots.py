"""Progress as a compact line of dots and letters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tally.dispatch import HandlerTable
from tally.output import colored, println, write, write_text
from tally.reports.base import EventHandler
from tally.types import Kind

if TYPE_CHECKING:
    from tally.events import Event


class Dots(EventHandler):
    """Prints ``.`` per pass, ``F``/``E``/``P`` per failure, error and pending
    assertion, ``[ ]`` around suites and ``( )`` around groups."""

    table = HandlerTable("dots")

    @table.register(Kind.PASS)
    def _pass(self, event: Event) -> None:
        write_text(self.console, ".")

    @table.register(Kind.FAIL_TYPE)
    def _fail(self, event: Event) -> None:
        write(self.console, colored("red", "F"))

    @table.register(Kind.ERROR)
    def _error(self, event: Event) -> None:
        write(self.console, colored("red", "E"))

    @table.register(Kind.PENDING)
    def _pending(self, event: Event) -> None:
        write(self.console, colored("yellow", "P"))

    @table.register(Kind.BEGIN_GROUP)
    def _begin_group(self, event: Event) -> None:
        write_text(self.console, "(")

    @table.register(Kind.END_GROUP)
    def _end_group(self, event: Event) -> None:
        write_text(self.console, ")")

    @table.register(Kind.BEGIN_TEST_SUITE)
    def _begin_suite(self, event: Event) -> None:
        write_text(self.console, "[")

    @table.register(Kind.END_TEST_SUITE)
    def _end_suite(self, event: Event) -> None:
        write_text(self.console, "]")

    @table.register(Kind.SUMMARY)
    def _summary(self, event: Event) -> None:
        println(self.console)
