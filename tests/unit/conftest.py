"""Shared fixtures for unit tests."""

import io

import pytest
from rich.console import Console

from tally.context import ReportRun
from tally.dispatch import HandlerTable
from tally.hierarchy import Hierarchy, register_builtins
from tally.legacy import LegacyForwarder
from tally.output import make_console


@pytest.fixture
def stream() -> io.StringIO:
    """Buffer the test console writes into."""
    return io.StringIO()


@pytest.fixture
def console(stream: io.StringIO) -> Console:
    """Colourless console recording into ``stream``."""
    return make_console(stream, color=False)


@pytest.fixture
def hierarchy() -> Hierarchy:
    """A private hierarchy with the built-in kinds, safe to extend."""
    return register_builtins(Hierarchy())


@pytest.fixture
def legacy_table() -> HandlerTable:
    """A private legacy handler table."""
    return HandlerTable("legacy-under-test")


@pytest.fixture
def run(console: Console, hierarchy: Hierarchy, legacy_table: HandlerTable) -> ReportRun:
    """A run wired to the private console, hierarchy and legacy table."""
    return ReportRun(
        console=console,
        hierarchy=hierarchy,
        legacy=LegacyForwarder(legacy_table, hierarchy=hierarchy),
    )
