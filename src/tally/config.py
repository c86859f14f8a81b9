"""Configuration loaded from the ``[tool.tally]`` table of pyproject.toml.

    [tool.tally]
    reporters = ["documentation"]
    fail_fast = true

    [tool.tally.reporter_options."myapp.reporting:Junit"]
    path = "build/junit.xml"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from tally.errors import ConfigError


PYPROJECT = "pyproject.toml"


@dataclass(frozen=True)
class TallyConfig:
    """Reporting options for one run.

    Attributes
    ----------
    reporters
        Reporter identifiers in invocation order.
    reporter_options
        Per-reporter constructor keyword arguments, keyed by identifier.
    fail_fast
        Abort the run at the first failure or error.
    color
        Emit colour markup.
    stack_trace_depth
        Maximum frames shown for errors, ``None`` for no limit beyond the
        formatter's own.
    """

    reporters: list[str] = field(default_factory=lambda: ["dots"])
    reporter_options: dict[str, dict[str, Any]] = field(default_factory=dict)
    fail_fast: bool = False
    color: bool = True
    stack_trace_depth: int | None = None

    def with_overrides(self, **changes: Any) -> TallyConfig:
        """Copy with every non-``None`` keyword applied.

        The copy never shares its reporter list or options with ``self``.
        """
        fields: dict[str, Any] = {
            "reporters": list(self.reporters),
            "reporter_options": _copy_options(self.reporter_options),
        }
        fields.update({key: value for key, value in changes.items() if value is not None})
        return replace(self, **fields)


def _copy_options(options: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    return {name: dict(kwargs) for name, kwargs in options.items()}


DEFAULT_CONFIG = TallyConfig()


def find_pyproject(start: Path | None = None) -> Path | None:
    """Nearest pyproject.toml in ``start`` or its parents."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT
        if candidate.is_file():
            return candidate
    return None


def _expect(table: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = table[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        msg = f"[tool.tally] {key} has invalid value {value!r}"
        raise ConfigError(msg)
    return value


def parse_config(table: dict[str, Any]) -> TallyConfig:
    """Build a config from the contents of a ``[tool.tally]`` table."""
    unknown = set(table) - {"reporters", "reporter_options", "fail_fast", "color", "stack_trace_depth"}
    if unknown:
        msg = f"Unknown [tool.tally] keys: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    changes: dict[str, Any] = {}
    if "reporters" in table:
        reporters = _expect(table, "reporters", (list, str))
        changes["reporters"] = [reporters] if isinstance(reporters, str) else list(reporters)
    if "reporter_options" in table:
        options = _expect(table, "reporter_options", dict)
        for name, kwargs in options.items():
            if not isinstance(kwargs, dict):
                msg = f"[tool.tally] reporter_options.{name} must be a table, got {kwargs!r}"
                raise ConfigError(msg)
        changes["reporter_options"] = _copy_options(options)
    if "fail_fast" in table:
        changes["fail_fast"] = _expect(table, "fail_fast", bool)
    if "color" in table:
        changes["color"] = _expect(table, "color", bool)
    if "stack_trace_depth" in table:
        changes["stack_trace_depth"] = _expect(table, "stack_trace_depth", int)
    return TallyConfig(**changes)


def load_config(path: Path | None = None) -> TallyConfig:
    """Load configuration from ``path`` or the nearest pyproject.toml.

    Returns :data:`DEFAULT_CONFIG` when there is no file or no table.
    """
    pyproject = path if path is not None else find_pyproject()
    if pyproject is None or not pyproject.exists():
        return DEFAULT_CONFIG
    with pyproject.open("rb") as fh:
        data = tomllib.load(fh)
    table = data.get("tool", {}).get("tally")
    if table is None:
        return DEFAULT_CONFIG
    return parse_config(table)


__all__ = ["DEFAULT_CONFIG", "TallyConfig", "find_pyproject", "load_config", "parse_config"]
