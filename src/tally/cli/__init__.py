"""CLI module for the tally reporting core."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from tally.config import TallyConfig, load_config
from tally.errors import ConfigError
from tally.events import Event
from tally.hierarchy import hierarchy
from tally.session import ReportSession
from tally.types import Kind, Signal


logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the tally CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        _configure_logging(args.log_level)

    if args.command == "replay":
        raise SystemExit(_run_replay(args))

    if args.command == "kinds":
        raise SystemExit(_run_kinds(Console(highlight=False)))

    parser.print_help()
    raise SystemExit(0)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tally", description="Test event reporting")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log reporting internals to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    replay_parser = subparsers.add_parser(
        "replay", help="Feed a JSON-lines event stream through reporters"
    )
    replay_parser.add_argument("events", help="Event file, one JSON object per line ('-' for stdin)")
    replay_parser.add_argument(
        "-r",
        "--reporter",
        dest="reporters",
        action="append",
        help="Reporter name or import string (repeatable, default from config)",
    )
    replay_parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Stop at the first failure or error",
    )
    replay_parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable colored output",
    )
    replay_parser.add_argument("--config", help="Path to a pyproject.toml with a [tool.tally] table")

    subparsers.add_parser("kinds", help="List known event kinds and their ancestors")
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _resolve_config(args: argparse.Namespace, config: TallyConfig) -> TallyConfig:
    return config.with_overrides(
        reporters=args.reporters,
        fail_fast=args.fail_fast,
        color=args.color,
    )


def read_events(stream: TextIO) -> Iterator[Event]:
    """Parse one event per non-blank line.

    Raises:
        ValueError: If a line is not a JSON object with a ``kind``.
    """
    for lineno, raw in enumerate(stream, start=1):
        if not raw.strip():
            continue
        try:
            yield Event.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            msg = f"line {lineno}: invalid event: {exc}"
            raise ValueError(msg) from exc


def _replay(session: ReportSession, stream: TextIO) -> None:
    saw_summary = False
    for event in read_events(stream):
        if session.run.hierarchy.is_descendant(event.kind, Kind.SUMMARY):
            saw_summary = True
        if session.emit(event) is Signal.ABORT:
            logger.info("Replay stopped early by fail-fast")
            break
    if session.aborted or not saw_summary:
        session.finish()


def _run_replay(args: argparse.Namespace) -> int:
    try:
        config = _resolve_config(args, load_config(Path(args.config) if args.config else None))
        session = ReportSession(config=config)
    except (ConfigError, tomllib.TOMLDecodeError, ValueError, TypeError, ImportError) as exc:
        Console(stderr=True).print(str(exc), style="red", markup=False)
        return 2

    try:
        if args.events == "-":
            _replay(session, sys.stdin)
        else:
            with open(args.events, encoding="utf-8") as fh:
                _replay(session, fh)
    except (OSError, ValueError) as exc:
        Console(stderr=True).print(str(exc), style="red", markup=False)
        return 2

    return session.exit_code


def _run_kinds(console: Console) -> int:
    for tag in sorted(hierarchy.tags()):
        ancestors = ", ".join(sorted(hierarchy.ancestors(tag)))
        console.print(f"{tag:<18} {ancestors}", markup=False)
    return 0


__all__ = ["main", "read_events"]
