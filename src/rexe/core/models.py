"""Domain models for rexe.

All records are **frozen** dataclasses or enums: immutable value
objects created once and only read afterwards.  They carry zero I/O and
no dependencies on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from types import CodeType

from rexe.exceptions import UsageError


# ---------------------------------------------------------------------------
# Input modes
# ---------------------------------------------------------------------------

class InputMode(enum.Enum):
    """How standard input is shaped before it reaches the user code.

    Each member's value is the one-letter code accepted by ``-m``.
    """

    LINE_STRING = "s"
    LINE_ENUMERATOR = "e"
    WHOLE_STRING = "b"
    NO_INPUT = "n"

    @property
    def code(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        """Human-readable label used in help text and verbose logs."""
        return _MODE_DESCRIPTIONS[self]

    @classmethod
    def codes(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def from_code(cls, code: str) -> InputMode:
        """Map a ``-m`` code to its mode.

        Raises
        ------
        UsageError
            When *code* is not one of the known codes.
        """
        try:
            return cls(code)
        except ValueError:
            valid = ", ".join(cls.codes())
            raise UsageError(
                f"'{code}' is not a valid input mode; must be one of {valid}.",
            ) from None


_MODE_DESCRIPTIONS: dict[InputMode, str] = {
    InputMode.LINE_STRING: "each line is a string (self), evaluated once per line",
    InputMode.LINE_ENUMERATOR: "self is an iterator over all input lines",
    InputMode.WHOLE_STRING: "self is the whole input as one string",
    InputMode.NO_INPUT: "no input; code is evaluated once without self",
}


# ---------------------------------------------------------------------------
# Resolved configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Options:
    """The configuration record produced by the option resolver."""

    input_mode: InputMode = InputMode.LINE_STRING
    """Selected input mode; defaults to one evaluation per line."""

    requires: tuple[str, ...] = ()
    """Module names to import, in declaration order (not de-duplicated)."""

    load_paths: tuple[Path, ...] = ()
    """Source files to execute after the startup file, in declaration order."""

    verbose: bool = False
    """Whether diagnostic lines are written to stderr."""

    source: str = ""
    """The user's program: remaining positional arguments joined by spaces."""


# ---------------------------------------------------------------------------
# Compiled user code
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CompiledScript:
    """User source compiled by a script evaluator.

    ``body`` holds any leading statements and ``expression`` the
    trailing expression whose value is the result of an invocation.
    Either may be ``None``; when ``expression`` is ``None`` the result
    is ``None``.
    """

    source: str
    body: CodeType | None = field(default=None, compare=False)
    expression: CodeType | None = field(default=None, compare=False)


class _NoContext:
    """Type of :data:`NO_CONTEXT`."""

    _instance: _NoContext | None = None

    def __new__(cls) -> _NoContext:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_CONTEXT"

    def __bool__(self) -> bool:
        return False


NO_CONTEXT = _NoContext()
"""Marker for invoking user code without any execution context."""
