"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
must satisfy.  Core code depends ONLY on these protocols, never on
concrete implementations, so mode dispatch and startup ordering can be
tested without executing real code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from rexe.core.models import NO_CONTEXT, CompiledScript


class ScriptEvaluator(Protocol):
    """Contract for code-evaluation backends.

    Every operation shares one evaluation namespace: modules required,
    files executed, and user code invoked all see each other's
    definitions.
    """

    def require(self, name: str) -> None:
        """Import module *name* into the evaluation namespace.

        Raises
        ------
        RequireError
            When the module cannot be imported.
        """
        ...  # pragma: no cover

    def execute_file(self, path: Path) -> None:
        """Execute the source file at *path* in the evaluation namespace.

        Raises
        ------
        LoadFileNotFoundError
            When *path* does not exist.
        EvaluationError
            When the file's code raises.
        """
        ...  # pragma: no cover

    def compile(self, source: str) -> CompiledScript:
        """Compile user *source* into an invocable unit.

        Raises
        ------
        ScriptSyntaxError
            When *source* is not valid code.
        """
        ...  # pragma: no cover

    def invoke(self, script: CompiledScript, context: Any = NO_CONTEXT) -> Any:
        """Run *script* against *context* and return its result.

        Passing :data:`~rexe.core.models.NO_CONTEXT` runs the code with
        no context bound at all.

        Raises
        ------
        EvaluationError
            When the user code raises.
        """
        ...  # pragma: no cover


class DiagnosticSink(Protocol):
    """Contract for the verbose diagnostic log.

    Callers that need to compute something expensive for a message
    (a timestamp, a repr) check :attr:`enabled` first.
    """

    @property
    def enabled(self) -> bool:
        ...  # pragma: no cover

    def log(self, message: str) -> None:
        """Write *message* as one line, or do nothing when disabled."""
        ...  # pragma: no cover
