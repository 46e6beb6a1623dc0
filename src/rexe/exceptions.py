"""Custom exception hierarchy for rexe.

Every failure that crosses a layer boundary inherits from
:class:`RexeError`.  Exceptions raised by user code are caught at the
infrastructure boundary and re-raised as :class:`EvaluationError` with
the original chained as ``__cause__``, so the CLI error boundary can
render one clean line instead of an interpreter traceback.

Hierarchy
---------
RexeError
├── UsageError
├── RequireError
├── LoadFileNotFoundError
├── ScriptSyntaxError
└── EvaluationError
"""

from __future__ import annotations


class RexeError(Exception):
    """Base exception for all rexe errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Option handling -------------------------------------------------------

class UsageError(RexeError, ValueError):
    """Raised when an option value is not acceptable (e.g. a bad mode code)."""


# --- Startup loading -------------------------------------------------------

class RequireError(RexeError):
    """Raised when a module named with ``-r`` cannot be imported."""


class LoadFileNotFoundError(RexeError):
    """Raised when a file named with ``-l`` does not exist."""


# --- User code -------------------------------------------------------------

class ScriptSyntaxError(RexeError):
    """Raised when user-supplied source cannot be compiled."""


class EvaluationError(RexeError):
    """Raised when user, startup-file, or load-file code raises."""


def describe_exception(exc: BaseException) -> str:
    """Render *exc* as ``"<TypeName>: <message>"`` for one-line reporting.

    The type name alone is returned when the exception carries no message.
    """
    message = str(exc)
    if not message:
        return type(exc).__name__
    return f"{type(exc).__name__}: {message}"
