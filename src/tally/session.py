"""Feeds one run's events through history, counters and reporters."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from rich.console import Console

from tally.config import DEFAULT_CONFIG, TallyConfig
from tally.context import ReportRun
from tally.dispatch import HandlerTable
from tally.errors import FailFastAbort
from tally.events import Event
from tally.hierarchy import Hierarchy
from tally.hierarchy import hierarchy as default_hierarchy
from tally.history import History
from tally.legacy import LegacyForwarder
from tally.output import make_console
from tally.reports import CounterHandler, Counters, FailFast, Reporter, Result
from tally.reports.registry import build_reporter, resolve_reporter
from tally.types import Kind, Signal


logger = logging.getLogger(__name__)


class ReportSession:
    """Owns the reporting state of a single run.

    For every event, in order: append it to the history, forward it to the
    legacy handlers if its kind is unknown, count it, hand it to each
    configured reporter, and finally let the fail-fast controller decide
    whether the run should stop. The first ``summary`` also replays the
    deferred events of the history to the legacy handlers, once.

    Usage:

        session = ReportSession(config=load_config())
        for event in engine.events():
            if session.emit(event) is Signal.ABORT:
                break
        session.finish()
        raise SystemExit(session.exit_code)
    """

    def __init__(
        self,
        reporters: Sequence[Any] | None = None,
        *,
        config: TallyConfig = DEFAULT_CONFIG,
        console: Console | None = None,
        hierarchy: Hierarchy | None = None,
        legacy_report: HandlerTable | None = None,
    ) -> None:
        graph = hierarchy or default_hierarchy
        self.config = config
        self.run = ReportRun(
            console=console or make_console(color=config.color),
            history=History(),
            hierarchy=graph,
            legacy=LegacyForwarder(legacy_report, hierarchy=graph),
            fail_fast=config.fail_fast,
            stack_trace_depth=config.stack_trace_depth,
        )
        self.counters = Counters()
        self.reporters = _single_result(
            [self._build(spec) for spec in (config.reporters if reporters is None else reporters)]
        )

        pipeline = Reporter([CounterHandler(self.run, self.counters)], name="counters")
        for rep in self.reporters:
            pipeline = pipeline + rep
        self._pipeline = pipeline + Reporter([FailFast(self.run)], name="fail-fast")
        self.aborted_by: Event | None = None
        self._replayed = False

    def _build(self, spec: Any) -> Reporter:
        if isinstance(spec, str):
            options = self.config.reporter_options.get(spec, {})
            return resolve_reporter(spec, self.run, **options)
        return build_reporter(spec, self.run)

    @property
    def history(self) -> History:
        return self.run.history

    @property
    def aborted(self) -> bool:
        return self.aborted_by is not None

    def emit(self, event: Event) -> Signal:
        """Process one event. Returns ``Signal.ABORT`` when the run must stop.

        Once aborted, further events other than ``summary`` are dropped.
        """
        if self.aborted and not self.run.hierarchy.is_descendant(event.kind, Kind.SUMMARY):
            logger.debug("Run aborted; dropping %r event", event.kind)
            return Signal.ABORT

        self.run.history.append(event)
        self.run.legacy.forward(event)
        if not self._replayed and self.run.hierarchy.is_descendant(event.kind, Kind.SUMMARY):
            self._replayed = True
            self.run.legacy.replay_deferred(self.run.history)
        signal = self._pipeline(event)
        if signal is Signal.ABORT and self.aborted_by is None:
            self.aborted_by = event
        return signal

    def report(self, event: Event) -> None:
        """Process one event, raising :class:`FailFastAbort` to stop the run."""
        if self.emit(event) is Signal.ABORT:
            raise FailFastAbort(self.aborted_by or event)

    def summary_event(self) -> Event:
        """A ``summary`` event carrying this session's counts."""
        counts = self.counters.as_dict()
        return Event(
            kind=Kind.SUMMARY,
            test=counts["test"],
            pass_=counts["pass"],
            fail=counts["fail"],
            error=counts["error"],
            pending=counts["pending"],
        )

    def finish(self, summary: Event | None = None) -> dict[str, int]:
        """Emit the summary (built from the counters by default) and return the counts."""
        self.emit(summary or self.summary_event())
        return self.counters.as_dict()

    @property
    def exit_code(self) -> int:
        return 1 if self.counters.failed else 0


def _single_result(reporters: list[Reporter]) -> list[Reporter]:
    """Drop every :class:`Result` handler after the first, so failures and
    totals are printed once per run."""
    seen = False
    deduped = []
    for rep in reporters:
        handlers = []
        for handler in rep:
            if isinstance(handler, Result):
                if seen:
                    logger.debug("Dropping duplicate Result handler from %r", rep.name)
                    continue
                seen = True
            handlers.append(handler)
        deduped.append(rep if len(handlers) == len(rep) else Reporter(handlers, name=rep.name))
    return deduped


__all__ = ["ReportSession"]
