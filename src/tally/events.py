"""Event and testable models.

Events are the wire contract between an execution engine and the reporting
core. The set of fields is open: engines and extensions may attach any extra
keyword, and it is kept on the (immutable) model.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tally.context.output_capture import OutputBuffer, read_buffer


class Testable(BaseModel):
    """Read-only description of the unit that produced an event.

    Attributes:
    ----------
    id : str | None
        Stable identifier, e.g. ``"unit/test_math.py::test_add"``.
    type : str | None
        Kind of unit (suite, module, function...).
    desc : str | None
        Human readable description shown by the documentation reporter.
    file, line
        Source location, used when the event itself carries none.
    output : str | None
        Captured stdout/stderr text.
    buffer : OutputBuffer | None
        Live capture buffer, read when ``output`` is not set.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str | None = None
    type: str | None = None
    desc: str | None = None
    file: str | None = None
    line: int | None = None
    output: str | None = None
    buffer: OutputBuffer | None = Field(default=None, repr=False)

    def captured_output(self) -> str:
        if self.output:
            return self.output
        if self.buffer is not None:
            return read_buffer(self.buffer)
        return ""


class Event(BaseModel):
    """A single test lifecycle occurrence.

    ``kind`` is mandatory; every other field depends on the kind. Summary
    counts use ``pass`` on the wire and ``pass_`` in Python.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    kind: str

    # Location
    file: str | None = None
    line: int | None = None
    var: str | None = None
    ns: str | None = None

    # "testing ..." descriptions and the named-test stack, most recent first
    testing_contexts: tuple[str, ...] = Field(default=(), alias="testing-contexts")
    testing_vars: tuple[str, ...] = Field(default=(), alias="testing-vars")

    # Assertion details
    assertion: str | None = None
    expected: Any = None
    actual: Any = None
    actuals: tuple[Any, ...] | None = None
    message: str | None = None
    handled_exception: bool = False

    testable: Testable | None = None
    debug: Any = None

    # Summary counts
    test: int | None = None
    pass_: int | None = Field(default=None, alias="pass")
    fail: int | None = None
    error: int | None = None
    pending: int | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def _kind_as_str(cls, value: Any) -> Any:
        # Kind members are StrEnum; store their plain value
        return str(value) if isinstance(value, str) else value

    def has(self, name: str) -> bool:
        """True when ``name`` was explicitly provided for this event."""
        return name in self.model_fields_set or name in (self.model_extra or {})

    def get(self, name: str, default: Any = None) -> Any:
        """Read a declared or extra field by name."""
        if name in type(self).model_fields:
            return getattr(self, name)
        return (self.model_extra or {}).get(name, default)

    def replace(self, **changes: Any) -> Event:
        return self.model_copy(update=changes)


__all__ = ["Event", "Testable"]
