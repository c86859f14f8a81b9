"""Failure details and the end-of-run summary.

Failures are not printed as they happen. When the ``summary`` event arrives,
every failure and error in the run's history is rendered in order and a
single totals line closes the report. A session keeps at most one
:class:`Result` however many reporters include it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from tally.dispatch import HandlerTable
from tally.hierarchy import is_fail_type
from tally.output import (
    colored,
    diff_values,
    format_value,
    print_exception,
    println,
    println_text,
    write,
)
from tally.reports.base import EventHandler
from tally.types import Kind

if TYPE_CHECKING:
    from tally.events import Event


OUTPUT_HEADER = "╭───── Test output ───────────────────────────────────────────────────────"
OUTPUT_FOOTER = "╰─────────────────────────────────────────────────────────────────────────"


def testing_vars_str(event: Event) -> str:
    """Name the current test and the source location of the assertion.

    Prefers the testable's id; otherwise joins the active test names,
    outermost first. Location falls back to the testable's.
    """
    testable = event.testable
    file = event.file or (testable.file if testable else None)
    line = event.line or (testable.line if testable else None)
    if testable is not None and testable.id:
        name = testable.id
    else:
        name = " ".join(reversed(event.testing_vars))
    return f"{name} ({file}:{line})"


def print_output(console: Console, event: Event) -> None:
    """Print the testable's captured output in a box, if there is any."""
    if event.testable is None:
        return
    out = event.testable.captured_output()
    if not out:
        return
    println_text(console, OUTPUT_HEADER)
    body = out.rstrip("\r\n")
    println_text(console, "\n".join(f"│ {line}" for line in body.split("\n")))
    println_text(console, OUTPUT_FOOTER)


def assertion_type(event: Event) -> str:
    """The comparison operator of the failed assertion, or ``"default"``."""
    return event.assertion or "default"


# Keyed on assertion_type() rather than kind; extensions can register their
# own operators.
print_expr = HandlerTable("print-expr")


@print_expr.set_default
def _print_plain(console: Console, event: Event) -> None:
    if event.has("expected"):
        println_text(console, f"expected: {event.expected!r}")
    if event.has("actual"):
        println_text(console, f"  actual: {event.actual!r}")


def _nested(text: str) -> str:
    return "\n".join(f"  {line}" for line in text.splitlines())


@print_expr.register("==")
def _print_equality(console: Console, event: Event) -> None:
    println_text(console, "Expected:")
    println_text(console, _nested(format_value(event.expected)))
    println_text(console, "Actual:")
    if event.actuals:
        diffs = [diff_values(event.expected, actual) for actual in event.actuals]
        println(console, "\n\n".join(_nested(diff) for diff in diffs))
    else:
        println_text(console, _nested(format_value(event.actual)))


class Result(EventHandler):
    """Renders failure details and totals on the ``summary`` event."""

    table = HandlerTable("result")
    fail_summary = HandlerTable("fail-summary")

    def _header(self, label: str, event: Event) -> None:
        println(self.console, f"\n{colored('red', label)} in {escape(testing_vars_str(event))}")
        if event.testing_contexts:
            println_text(self.console, " ".join(reversed(event.testing_contexts)))
        if event.message:
            println_text(self.console, event.message)

    @fail_summary.register(Kind.FAIL_TYPE)
    def _fail_summary(self, event: Event) -> None:
        self._header("FAIL", event)
        print_expr.resolve(assertion_type(event), self.run.hierarchy)(self.console, event)
        print_output(self.console, event)

    @fail_summary.register(Kind.ERROR)
    def _error_summary(self, event: Event) -> None:
        self._header("ERROR", event)
        print_output(self.console, event)
        write(self.console, "Exception: ")
        actual = event.actual
        if isinstance(actual, BaseException):
            println(self.console)
            print_exception(self.console, actual, self.run.stack_trace_depth)
        else:
            println_text(self.console, repr(actual))

    def render_failure(self, event: Event) -> None:
        self.fail_summary.resolve(event.kind, self.run.hierarchy)(self, event)

    @table.register(Kind.SUMMARY)
    def _summary(self, event: Event) -> None:
        hierarchy = self.run.hierarchy
        history = self.run.history

        for failure in history.select(lambda e: is_fail_type(e, hierarchy)):
            self.render_failure(failure)

        println(self.console, summary_line(event))


def summary_line(event: Event) -> str:
    """Markup for the totals line of a ``summary`` event."""
    test = event.test or 0
    passed = event.pass_ or 0
    fail = event.fail or 0
    error = event.error or 0
    pending = event.pending or 0

    failed = fail + error > 0
    text = f"{test} tests, {passed + fail + error} assertions, "
    if error > 0:
        text += f"{error} errors, "
    if pending > 0:
        text += f"{pending} pending, "
    text += f"{fail} failures."

    if failed:
        color = "red"
    elif pending > 0:
        color = "yellow"
    else:
        color = "green"
    return colored(color, text)
