"""Built-in reporters.

Each reporter is an ordered list of handlers; several can be active in the
same run.
"""

from tally.reports.base import EventHandler, Handler, Reporter
from tally.reports.counters import CounterHandler, Counters
from tally.reports.debug import Debug
from tally.reports.documentation import ContextDiffRenderer, Documentation
from tally.reports.dots import Dots
from tally.reports.fail_fast import FailFast
from tally.reports.registry import (
    build_reporter,
    get_reporter_registry,
    register_builtin,
    reporter,
    resolve_reporter,
    resolve_reporters,
)
from tally.reports.result import Result


register_builtin("dots", [Dots, Result])
register_builtin("documentation", [Documentation, Result])
register_builtin("summary", [Result])
register_builtin("counters", [CounterHandler])
register_builtin("debug", [Debug])
register_builtin("fail-fast", [FailFast])

__all__ = [
    "ContextDiffRenderer",
    "CounterHandler",
    "Counters",
    "Debug",
    "Documentation",
    "Dots",
    "EventHandler",
    "FailFast",
    "Handler",
    "Reporter",
    "Result",
    "build_reporter",
    "get_reporter_registry",
    "register_builtin",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
