"""Per-run state shared by every handler of a report session."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console

from tally.hierarchy import Hierarchy
from tally.hierarchy import hierarchy as default_hierarchy
from tally.history import History
from tally.legacy import LegacyForwarder
from tally.output import make_console


@dataclass
class ReportRun:
    """Everything a handler may read while processing one run's events.

    Attributes
    ----------
    console
        Destination of all reporter output.
    history
        Append-only log of the run's events, read when the summary prints.
    hierarchy
        Kind hierarchy used for dispatch.
    legacy
        Forwarder for unknown and deferred kinds.
    fail_fast
        Abort the run at the first unhandled failure or error. Read-only for
        handlers; set from configuration before the run starts.
    stack_trace_depth
        Maximum frames shown for errors, ``None`` for the formatter default.
    """

    console: Console = field(default_factory=make_console)
    history: History = field(default_factory=History)
    hierarchy: Hierarchy = field(default_factory=lambda: default_hierarchy)
    legacy: LegacyForwarder = field(default_factory=LegacyForwarder)
    fail_fast: bool = False
    stack_trace_depth: int | None = None
