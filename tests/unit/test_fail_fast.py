"""Tests for tally.reports.fail_fast."""

from dataclasses import replace

from tally.events import Event
from tally.reports.base import Reporter
from tally.reports.fail_fast import FailFast
from tally.types import Kind, Signal


def test_aborts_on_first_failure_when_enabled(run):
    fail_fast = FailFast(replace(run, fail_fast=True))

    assert fail_fast(Event(kind=Kind.PASS)) is Signal.CONTINUE
    assert fail_fast(Event(kind=Kind.FAIL)) is Signal.ABORT
    assert fail_fast(Event(kind=Kind.ERROR)) is Signal.ABORT


def test_handled_exceptions_never_abort(run):
    fail_fast = FailFast(replace(run, fail_fast=True))

    assert fail_fast(Event(kind=Kind.ERROR, handled_exception=True)) is Signal.CONTINUE


def test_never_aborts_when_disabled(run):
    fail_fast = FailFast(run)

    for _ in range(10):
        assert fail_fast(Event(kind=Kind.FAIL)) is Signal.CONTINUE


def test_extension_fail_types_abort(run):
    run.hierarchy.derive("mismatch", Kind.FAIL_TYPE)

    assert FailFast(replace(run, fail_fast=True))(Event(kind="mismatch")) is Signal.ABORT


def test_abort_stops_the_rest_of_the_reporter(run):
    seen = []
    reporter = Reporter([seen.append, FailFast(replace(run, fail_fast=True)), seen.append])

    assert reporter(Event(kind=Kind.FAIL)) is Signal.ABORT
    assert len(seen) == 1
