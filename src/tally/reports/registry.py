"""Reporter registry for plugin-style reporter registration.

A reporter identifier resolves to an ordered list of handlers. Entries in the
list are either handler classes, instantiated with the run (and any
per-reporter options), or plain ``handler(event)`` callables used as they are.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from tally.context import ReportRun
from tally.reports.base import Handler, Reporter


logger = logging.getLogger(__name__)

T = TypeVar("T")

HandlerSpec = Any  # a handler class, a handler callable, or a sequence of those

_reporter_registry: dict[str, HandlerSpec] = {}
_builtin_registry: dict[str, HandlerSpec] = {}


def reporter(
    target: T | None = None,
    *,
    enabled: bool = True,
    name: str | None = None,
) -> T | Callable[[T], T]:
    """Register a handler class or handler function under a reporter name.

    Can be used as a decorator with or without arguments:

        @reporter
        class Junit(EventHandler): ...

        @reporter(name="beep")
        def beep_on_failure(event): ...

    Args:
        target: The handler class or function to register.
        enabled: Whether to register it (default True).
        name: Custom name for registry lookup (defaults to ``__name__``).
    """

    def decorator(target: T) -> T:
        if enabled:
            registry_name = name or target.__name__
            _reporter_registry[registry_name] = target
            logger.debug("Registered reporter %r", registry_name)
        return target

    if target is not None:
        return decorator(target)
    return decorator


def register_builtin(name: str, handlers: HandlerSpec) -> None:
    """Register a built-in reporter (persists through clear)."""
    _reporter_registry[name] = handlers
    _builtin_registry[name] = handlers


def get_reporter_registry() -> dict[str, HandlerSpec]:
    """Get the global reporter registry."""
    return _reporter_registry


def clear_reporter_registry() -> None:
    """Clear all registered reporters, keeping built-ins."""
    _reporter_registry.clear()
    _reporter_registry.update(_builtin_registry)


def _import_handlers(import_path: str) -> HandlerSpec:
    """Import a handler spec from an import string.

    Supports formats:
        - "module.path:attribute"
        - "module.path.attribute"
    """
    if ":" in import_path:
        module_path, attr = import_path.rsplit(":", 1)
    elif "." in import_path:
        module_path, attr = import_path.rsplit(".", 1)
    else:
        msg = f"Invalid import path: {import_path}"
        raise ValueError(msg)

    module = importlib.import_module(module_path)
    return getattr(module, attr)


def _instantiate(spec: Any, run: ReportRun, options: dict[str, Any], source: str) -> Handler:
    if isinstance(spec, type):
        return spec(run, **options)
    if callable(spec):
        return spec
    msg = f"{source} is not a handler class or callable"
    raise TypeError(msg)


def build_reporter(
    spec: HandlerSpec,
    run: ReportRun,
    *,
    name: str | None = None,
    **options: Any,
) -> Reporter:
    """Turn a handler spec into a :class:`Reporter` bound to ``run``."""
    if isinstance(spec, Reporter):
        return spec
    source = name or repr(spec)
    if isinstance(spec, Sequence) and not isinstance(spec, str):
        handlers = [_instantiate(item, run, options, source) for item in spec]
    else:
        handlers = [_instantiate(spec, run, options, source)]
    return Reporter(handlers, name=name)


def resolve_reporter(name: str, run: ReportRun, **options: Any) -> Reporter:
    """Resolve a reporter by registry name or import string.

    Args:
        name: Registry name (e.g., "dots") or import string
              (e.g., "myapp.reporting:junit").
        run: The run the reporter's handlers are bound to.
        **options: Arguments passed to handler class constructors.

    Returns:
        Reporter with freshly constructed handlers.

    Raises:
        ValueError: If reporter cannot be resolved.
    """
    if name in _reporter_registry:
        return build_reporter(_reporter_registry[name], run, name=name, **options)

    if ":" in name or "." in name:
        return build_reporter(_import_handlers(name), run, name=name, **options)

    available = ", ".join(sorted(_reporter_registry.keys()))
    msg = f"Unknown reporter: {name}. Available: {available}"
    raise ValueError(msg)


def resolve_reporters(
    names: Sequence[str],
    run: ReportRun,
    options: dict[str, dict[str, Any]] | None = None,
) -> list[Reporter]:
    """Resolve multiple reporters by name with optional per-reporter options.

    Args:
        names: Reporter names or import strings, in invocation order.
        run: The run every reporter is bound to.
        options: Dict mapping reporter names to constructor kwargs.

    Returns:
        List of Reporters in the order given.
    """
    options = options or {}
    reporters = []
    for name in names:
        kwargs = options.get(name, {})
        reporters.append(resolve_reporter(name, run, **kwargs))
    return reporters


__all__ = [
    "build_reporter",
    "clear_reporter_registry",
    "get_reporter_registry",
    "register_builtin",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
