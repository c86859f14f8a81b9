"""Sys-level stdout/stderr capture attached to testables.

Engines wrap each test in :func:`capture_output` and hand the resulting
:class:`OutputBuffer` to the testable; the failure renderer prints whatever it
holds under a "Test output" box. Only Python-level writes are captured
(print, sys.stdout.write), not fd-level output from subprocesses.
"""

from __future__ import annotations

import io
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO


class OutputBuffer:
    """Interleaved stdout/stderr text captured for one test."""

    def __init__(self) -> None:
        self._text = io.StringIO()
        self._lock = threading.Lock()

    def write(self, s: str) -> int:
        with self._lock:
            return self._text.write(s)

    def getvalue(self) -> str:
        with self._lock:
            return self._text.getvalue()

    def clear(self) -> None:
        with self._lock:
            self._text.seek(0)
            self._text.truncate()


def read_buffer(buffer: OutputBuffer | None) -> str:
    """Return everything captured so far without clearing it."""
    if buffer is None:
        return ""
    return buffer.getvalue()


class _TeeStream(io.TextIOBase):
    """Stand-in for sys.stdout/stderr that copies writes into a buffer."""

    def __init__(self, original: TextIO, buffer: OutputBuffer, swallow: bool) -> None:
        self._original = original
        self._buffer = buffer
        self._swallow = swallow

    def write(self, s: str) -> int:
        self._buffer.write(s)
        if not self._swallow:
            self._original.write(s)
        return len(s)

    def flush(self) -> None:
        self._original.flush()

    @property
    def encoding(self) -> str | None:
        return getattr(self._original, "encoding", "utf-8")

    def isatty(self) -> bool:
        return False


@contextmanager
def capture_output(
    buffer: OutputBuffer | None = None,
    *,
    swallow: bool = True,
) -> Iterator[OutputBuffer]:
    """Redirect sys.stdout and sys.stderr into ``buffer`` for the block.

    Args:
        buffer: Buffer to append to; a fresh one is created when omitted.
        swallow: If True, output is captured only. If False, it is captured
                 and also passed through to the real streams.
    """
    buf = buffer if buffer is not None else OutputBuffer()
    original_stdout, original_stderr = sys.stdout, sys.stderr
    sys.stdout = _TeeStream(original_stdout, buf, swallow)
    sys.stderr = _TeeStream(original_stderr, buf, swallow)
    try:
        yield buf
    finally:
        sys.stdout, sys.stderr = original_stdout, original_stderr


__all__ = ["OutputBuffer", "capture_output", "read_buffer"]
