"""Stops the run at the first failure or error."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tally.hierarchy import is_fail_type
from tally.types import Signal

if TYPE_CHECKING:
    from tally.context import ReportRun
    from tally.events import Event


logger = logging.getLogger(__name__)


class FailFast:
    """Signals an abort on fail-type events when the run has fail-fast on.

    Must come after every counting and printing handler so the failure is
    recorded before the run stops. Events flagged ``handled_exception`` were
    already dealt with upstream and never abort.
    """

    def __init__(self, run: ReportRun) -> None:
        self.run = run

    def should_abort(self, event: Event) -> bool:
        return (
            self.run.fail_fast
            and is_fail_type(event, self.run.hierarchy)
            and not event.handled_exception
        )

    def __call__(self, event: Event) -> Signal:
        if self.should_abort(event):
            logger.info("Fail-fast: aborting run on %r event", event.kind)
            return Signal.ABORT
        return Signal.CONTINUE
