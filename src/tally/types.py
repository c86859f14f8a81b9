"""Shared types for the tally reporting core."""

from enum import Enum, StrEnum


class Kind(StrEnum):
    """Built-in event kinds.

    Extensions add their own kinds as plain strings and attach them to these
    through :func:`tally.hierarchy.derive`.
    """

    # Abstract ancestors, never emitted directly
    KNOWN = "known"
    FAIL_TYPE = "fail-type"
    DEFERRED = "deferred"

    # Assertion outcomes
    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"
    PENDING = "pending"

    # Lifecycle
    BEGIN_TEST_SUITE = "begin-test-suite"
    END_TEST_SUITE = "end-test-suite"
    BEGIN_GROUP = "begin-group"
    END_GROUP = "end-group"
    BEGIN_TEST = "begin-test"
    END_TEST = "end-test"
    SUMMARY = "summary"


class Signal(Enum):
    """Outcome of handing one event to a handler or reporter."""

    CONTINUE = "continue"
    ABORT = "abort"  # Fail-fast: stop the run after this event
