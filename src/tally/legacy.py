"""Compatibility seam for event kinds the core does not know about.

Third-party extensions that predate the kind hierarchy register plain
single-argument handlers on :data:`legacy_report`:

    from tally.legacy import legacy_report

    @legacy_report.register("mismatch")
    def report_mismatch(event): ...

Events of kinds that do not derive from ``known`` are forwarded there as they
arrive. Kinds deriving from ``deferred`` are replayed there once, when the
summary is printed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tally.dispatch import HandlerTable
from tally.hierarchy import Hierarchy, is_deferred, is_known

if TYPE_CHECKING:
    from tally.events import Event


logger = logging.getLogger(__name__)

legacy_report = HandlerTable("legacy")


class LegacyForwarder:
    """Routes unknown and deferred events to a legacy handler table."""

    def __init__(
        self,
        report: HandlerTable | None = None,
        *,
        hierarchy: Hierarchy | None = None,
    ) -> None:
        self.report = report if report is not None else legacy_report
        self.hierarchy = hierarchy

    def forward(self, event: Event) -> bool:
        """Pass ``event`` on if its kind is unknown and has a legacy handler.

        Returns whether the event was forwarded.
        """
        if is_known(event, self.hierarchy):
            return False
        if not self.report.handles(event.kind, self.hierarchy):
            return False
        logger.debug("Forwarding unknown %r event to legacy handler", event.kind)
        self.report.resolve(event.kind, self.hierarchy)(event)
        return True

    def replay(self, event: Event) -> None:
        """Hand ``event`` to the legacy table unconditionally."""
        self.report.resolve(event.kind, self.hierarchy)(event)

    def replay_deferred(self, events: Iterable[Event]) -> int:
        """Replay every deferred event of ``events``, in order. Returns how many."""
        replayed = 0
        for event in events:
            if is_deferred(event, self.hierarchy):
                self.replay(event)
                replayed += 1
        if replayed:
            logger.debug("Replayed %d deferred events", replayed)
        return replayed


__all__ = ["LegacyForwarder", "legacy_report"]
