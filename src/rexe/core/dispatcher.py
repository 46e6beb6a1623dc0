"""Input-mode dispatch — shapes stdin and drives the user code.

The dispatcher owns no streams: stdin and stdout are injected at
construction time so the four strategies are testable with plain
``io.StringIO`` objects.

Strategies
----------
* ``LINE_STRING``     — one invocation per line, terminator stripped.
* ``LINE_ENUMERATOR`` — one invocation with a lazy iterator of lines.
* ``WHOLE_STRING``    — one invocation with all of stdin as a string.
* ``NO_INPUT``        — one invocation without any context; stdin is
  never touched.

Failure policy
--------------
Nothing is caught here.  ``BrokenPipeError`` from a write and any
:class:`~rexe.exceptions.EvaluationError` from the evaluator propagate
to the CLI error boundary; in ``LINE_STRING`` mode the first failing
line ends the run.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any, TextIO

from rexe.core.models import NO_CONTEXT, CompiledScript, InputMode
from rexe.core.protocols import ScriptEvaluator


def chomp(line: str) -> str:
    """Remove exactly one trailing line terminator (``\\r\\n``, ``\\n`` or ``\\r``)."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


class InputModeDispatcher:
    """Run a compiled script under one of the :class:`InputMode` strategies.

    Parameters
    ----------
    evaluator:
        Any object satisfying the :class:`ScriptEvaluator` protocol.
    stdin:
        Text stream the input is read from.  ``None`` (a closed stdin,
        as with ``<&-``) reads as empty input.
    stdout:
        Text stream each result is printed to.
    """

    def __init__(
        self,
        evaluator: ScriptEvaluator,
        stdin: TextIO | None,
        stdout: TextIO,
    ) -> None:
        self._evaluator: ScriptEvaluator = evaluator
        self._stdin: TextIO = stdin if stdin is not None else io.StringIO()
        self._stdout: TextIO = stdout
        self._strategies: dict[InputMode, Callable[[CompiledScript], None]] = {
            InputMode.LINE_STRING: self._run_line_string,
            InputMode.LINE_ENUMERATOR: self._run_line_enumerator,
            InputMode.WHOLE_STRING: self._run_whole_string,
            InputMode.NO_INPUT: self._run_no_input,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, mode: InputMode, script: CompiledScript) -> None:
        """Execute *script* using the strategy selected by *mode*."""
        self._strategies[mode](script)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _run_line_string(self, script: CompiledScript) -> None:
        for line in self._stdin:
            self._emit(self._evaluator.invoke(script, chomp(line)))

    def _run_line_enumerator(self, script: CompiledScript) -> None:
        self._emit(self._evaluator.invoke(script, iter(self._stdin)))

    def _run_whole_string(self, script: CompiledScript) -> None:
        self._emit(self._evaluator.invoke(script, self._stdin.read()))

    def _run_no_input(self, script: CompiledScript) -> None:
        self._emit(self._evaluator.invoke(script, NO_CONTEXT))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _emit(self, result: Any) -> None:
        """Print *result* on its own line and flush immediately."""
        self._stdout.write(f"{result}\n")
        self._stdout.flush()
