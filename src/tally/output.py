"""Console writing, colour and value formatting helpers.

Everything the reporters print goes through a :class:`rich.console.Console`.
User-supplied text is always escaped before it is combined with markup, so
brackets in test names or messages are printed literally.
"""

from __future__ import annotations

import difflib
from typing import IO, Any

from rich.console import Console
from rich.markup import escape
from rich.pretty import pretty_repr
from rich.traceback import Traceback


def make_console(file: IO[str] | None = None, *, color: bool = True) -> Console:
    """Build the console reporters write to."""
    return Console(
        file=file,
        no_color=not color,
        highlight=False,
        soft_wrap=True,
        emoji=False,
    )


def colored(color: str, text: str) -> str:
    """Wrap literal ``text`` in rich markup for ``color``."""
    return f"[{color}]{escape(str(text))}[/{color}]"


def write(console: Console, markup: str = "") -> None:
    """Print ``markup`` without a trailing newline."""
    console.print(markup, end="")
    console.file.flush()


def write_text(console: Console, text: str) -> None:
    """Print literal ``text`` without a trailing newline."""
    write(console, escape(text))


def println(console: Console, markup: str = "") -> None:
    console.print(markup)


def println_text(console: Console, text: str) -> None:
    console.print(text, markup=False)


def format_value(value: Any) -> str:
    """Pretty-print a value the way assertion output shows it."""
    return pretty_repr(value)


def diff_values(expected: Any, actual: Any) -> str:
    """Markup for a line diff between the pretty forms of two values.

    Lines only in ``expected`` are prefixed ``-`` in red, lines only in
    ``actual`` ``+`` in green; unchanged lines are indented.
    """
    lines = []
    for line in difflib.ndiff(
        format_value(expected).splitlines(), format_value(actual).splitlines()
    ):
        tag, body = line[:2], line[2:]
        if tag == "- ":
            lines.append(colored("red", f"-{body}"))
        elif tag == "+ ":
            lines.append(colored("green", f"+{body}"))
        elif tag == "  ":
            lines.append(escape(f" {body}"))
    return "\n".join(lines)


def print_exception(console: Console, exc: BaseException, depth: int | None = None) -> None:
    """Render an exception with its stack trace."""
    console.print(
        Traceback.from_exception(
            type(exc),
            exc,
            exc.__traceback__,
            max_frames=depth or 100,
        )
    )


__all__ = [
    "colored",
    "diff_values",
    "format_value",
    "make_console",
    "print_exception",
    "println",
    "println_text",
    "write",
    "write_text",
]
