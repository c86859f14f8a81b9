"""Error types for the tally reporting core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tally.events import Event


class TallyError(Exception):
    """Base class for reporting-core misconfiguration."""


class CycleError(TallyError):
    """Raised when a derivation would make the tag hierarchy cyclic."""

    def __init__(self, child: str, parent: str) -> None:
        self.child = child
        self.parent = parent
        super().__init__(
            f"Cannot derive {child!r} from {parent!r}: "
            f"{parent!r} already derives from {child!r}"
        )


class ConfigError(TallyError):
    """Raised when the [tool.tally] configuration table is malformed."""


class FailFastAbort(Exception):
    """Raised to halt a run at the first failure when fail-fast is enabled.

    Deliberately not a :class:`TallyError`: this is a control signal, and the
    execution engine is expected to catch it and stop scheduling tests rather
    than report it as a defect.
    """

    def __init__(self, event: Event) -> None:
        self.event = event
        super().__init__(f"Fail-fast abort on {event.kind!r} event")
