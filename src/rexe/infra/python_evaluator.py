"""Python-backed implementation of :class:`~rexe.core.protocols.ScriptEvaluator`.

This module is the **only** place in the codebase that calls
``compile``, ``eval``, ``exec`` or ``importlib``.  Exceptions raised by
evaluated code are caught here and re-raised as typed
:class:`~rexe.exceptions.RexeError` subclasses, except for
``BrokenPipeError``, which the CLI boundary handles itself.

Evaluation model
----------------
* One globals dict is shared by requires, the startup file, load files
  and the user code.
* Source is compiled as a single expression when it parses as one.
  Otherwise it is compiled as statements; a trailing expression
  statement supplies the result, and pure statements yield ``None``.
* The context is bound to the name ``self`` before each invocation and
  removed when invoking with :data:`~rexe.core.models.NO_CONTEXT`.
"""

from __future__ import annotations

import ast
import builtins
import importlib
import sys
from collections.abc import Callable
from pathlib import Path
from types import CodeType
from typing import Any

from rexe.core.models import NO_CONTEXT, CompiledScript
from rexe.exceptions import (
    EvaluationError,
    LoadFileNotFoundError,
    RequireError,
    ScriptSyntaxError,
    describe_exception,
)
from rexe.utils import SCRIPT_FILENAME


class PythonEvaluator:
    """Concrete :class:`ScriptEvaluator` backed by the running interpreter.

    Usage::

        evaluator = PythonEvaluator()
        evaluator.require("json")
        script = evaluator.compile("json.dumps(self)")
        evaluator.invoke(script, "hello")   # -> '"hello"'

    This class satisfies the :class:`~rexe.core.protocols.ScriptEvaluator`
    protocol structurally.
    """

    CONTEXT_NAME: str = "self"

    def __init__(self, namespace: dict[str, Any] | None = None) -> None:
        if namespace is None:
            namespace = {}
        namespace.setdefault("__name__", "__rexe__")
        namespace.setdefault("__builtins__", builtins)
        self._namespace: dict[str, Any] = namespace

    @property
    def namespace(self) -> dict[str, Any]:
        """The shared globals dict all code is evaluated in."""
        return self._namespace

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def require(self, name: str) -> None:
        """Import *name* and bind its top-level package, like ``import a.b``."""
        try:
            importlib.import_module(name)
        except ImportError as exc:
            raise RequireError(
                f"cannot load such module -- {name}",
                hint="Check the -r/--require names and that the package is installed.",
            ) from exc
        except Exception as exc:
            raise RequireError(
                f"importing {name} failed: {describe_exception(exc)}",
            ) from exc

        top_level = name.partition(".")[0]
        self._namespace[top_level] = sys.modules[top_level]

    def execute_file(self, path: Path) -> None:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise LoadFileNotFoundError(
                f"No such file to load -- {path}",
            ) from exc

        code = self._compile(text, str(path), "exec")
        self._namespace.pop(self.CONTEXT_NAME, None)
        self._run(lambda: exec(code, self._namespace), where=str(path))

    def compile(self, source: str) -> CompiledScript:
        try:
            expression = compile(source, SCRIPT_FILENAME, "eval")
        except SyntaxError:
            pass
        else:
            return CompiledScript(source=source, expression=expression)

        tree = self._parse(source)
        trailing: ast.Expression | None = None
        if tree.body and isinstance(tree.body[-1], ast.Expr):
            trailing = ast.Expression(body=tree.body.pop().value)

        body = self._compile(tree, SCRIPT_FILENAME, "exec") if tree.body else None
        expression = (
            self._compile(trailing, SCRIPT_FILENAME, "eval") if trailing else None
        )
        return CompiledScript(source=source, body=body, expression=expression)

    def invoke(self, script: CompiledScript, context: Any = NO_CONTEXT) -> Any:
        if context is NO_CONTEXT:
            self._namespace.pop(self.CONTEXT_NAME, None)
        else:
            self._namespace[self.CONTEXT_NAME] = context
        return self._run(lambda: self._execute(script), where=None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _execute(self, script: CompiledScript) -> Any:
        if script.body is not None:
            exec(script.body, self._namespace)
        if script.expression is None:
            return None
        return eval(script.expression, self._namespace)

    @staticmethod
    def _run(thunk: Callable[[], Any], *, where: str | None) -> Any:
        """Call *thunk*, mapping anything it raises to :class:`EvaluationError`."""
        try:
            return thunk()
        except BrokenPipeError:
            raise
        except Exception as exc:
            prefix = f"{where}: " if where else ""
            raise EvaluationError(f"{prefix}{describe_exception(exc)}") from exc

    @staticmethod
    def _parse(source: str) -> ast.Module:
        try:
            return ast.parse(source, SCRIPT_FILENAME, "exec")
        except SyntaxError as exc:
            raise ScriptSyntaxError(
                f"invalid syntax in source: {exc.msg}",
                hint=f"Source was: {source}",
            ) from exc

    @staticmethod
    def _compile(node: Any, filename: str, mode: str) -> CodeType:
        try:
            return compile(node, filename, mode)
        except SyntaxError as exc:
            location = f"{filename}:{exc.lineno}" if exc.lineno else filename
            raise ScriptSyntaxError(
                f"invalid syntax in {location}: {exc.msg}",
            ) from exc
