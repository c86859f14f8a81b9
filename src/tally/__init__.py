"""tally - event-driven reporting core for test runners."""

from .config import DEFAULT_CONFIG, TallyConfig, load_config
from .errors import CycleError, FailFastAbort, TallyError
from .events import Event, Testable
from .hierarchy import Hierarchy, derive, is_descendant
from .legacy import LegacyForwarder, legacy_report
from .reports import Reporter, reporter, resolve_reporter
from .session import ReportSession
from .types import Kind, Signal
from .version import __version__


__all__ = [
    # Events
    "Event",
    "Kind",
    "Testable",
    # Hierarchy
    "Hierarchy",
    "derive",
    "is_descendant",
    # Reporting
    "ReportSession",
    "Reporter",
    "Signal",
    "reporter",
    "resolve_reporter",
    "legacy_report",
    "LegacyForwarder",
    # Configuration
    "DEFAULT_CONFIG",
    "TallyConfig",
    "load_config",
    # Errors
    "CycleError",
    "FailFastAbort",
    "TallyError",
    "__version__",
]
