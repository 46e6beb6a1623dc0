"""Tests for the Python evaluation backend (infra/python_evaluator.py).

Coverage:
* Expression, statement, and mixed source compilation.
* ``self`` binding and ``NO_CONTEXT``.
* Requires bind top-level packages; failures map to ``RequireError``.
* File execution shares the namespace; failures are typed.
* User exceptions are wrapped; ``BrokenPipeError`` is not.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from rexe.core.models import NO_CONTEXT
from rexe.exceptions import (
    EvaluationError,
    LoadFileNotFoundError,
    RequireError,
    ScriptSyntaxError,
)
from rexe.infra.python_evaluator import PythonEvaluator


@pytest.fixture
def evaluator() -> PythonEvaluator:
    return PythonEvaluator()


# ---------------------------------------------------------------------------
# compile / invoke
# ---------------------------------------------------------------------------

class TestCompileAndInvoke:
    def test_expression(self, evaluator: PythonEvaluator) -> None:
        script = evaluator.compile("self.upper()")
        assert script.body is None
        assert evaluator.invoke(script, "abc") == "ABC"

    def test_statements_with_trailing_expression(
        self, evaluator: PythonEvaluator,
    ) -> None:
        script = evaluator.compile("n = len(self); n * 2")
        assert script.body is not None
        assert evaluator.invoke(script, "abc") == 6

    def test_statements_only_return_none(self, evaluator: PythonEvaluator) -> None:
        script = evaluator.compile("n = 1")
        assert script.expression is None
        assert evaluator.invoke(script, "abc") is None

    def test_empty_source_returns_none(self, evaluator: PythonEvaluator) -> None:
        assert evaluator.invoke(evaluator.compile(""), "abc") is None

    def test_script_keeps_source(self, evaluator: PythonEvaluator) -> None:
        assert evaluator.compile("self").source == "self"

    def test_comprehension_and_lambda_see_self(
        self, evaluator: PythonEvaluator,
    ) -> None:
        script = evaluator.compile("[c + self for c in 'ab'] + [(lambda: self)()]")
        assert evaluator.invoke(script, "x") == ["ax", "bx", "x"]

    def test_none_is_a_real_context(self, evaluator: PythonEvaluator) -> None:
        assert evaluator.invoke(evaluator.compile("self is None"), None) is True

    def test_no_context_leaves_self_unbound(self, evaluator: PythonEvaluator) -> None:
        has_self = evaluator.compile("'self' in globals()")
        assert evaluator.invoke(has_self, "bound") is True
        assert evaluator.invoke(has_self, NO_CONTEXT) is False

    def test_self_reference_without_context_fails(
        self, evaluator: PythonEvaluator,
    ) -> None:
        with pytest.raises(EvaluationError, match="NameError"):
            evaluator.invoke(evaluator.compile("self"))

    def test_state_persists_between_invocations(
        self, evaluator: PythonEvaluator,
    ) -> None:
        script = evaluator.compile(
            "total = globals().get('total', 0) + int(self); total",
        )
        assert [evaluator.invoke(script, n) for n in ("1", "2", "3")] == [1, 3, 6]

    def test_syntax_error(self, evaluator: PythonEvaluator) -> None:
        with pytest.raises(ScriptSyntaxError) as exc_info:
            evaluator.compile("def (")
        assert isinstance(exc_info.value.__cause__, SyntaxError)
        assert exc_info.value.hint == "Source was: def ("


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

class TestErrorMapping:
    def test_user_exception_is_wrapped(self, evaluator: PythonEvaluator) -> None:
        with pytest.raises(EvaluationError) as exc_info:
            evaluator.invoke(evaluator.compile("undefined_name"), "x")
        assert str(exc_info.value) == "NameError: name 'undefined_name' is not defined"
        assert isinstance(exc_info.value.__cause__, NameError)

    def test_type_error_is_wrapped(self, evaluator: PythonEvaluator) -> None:
        with pytest.raises(EvaluationError, match="TypeError"):
            evaluator.invoke(evaluator.compile("self + 1"), "x")

    def test_broken_pipe_is_not_wrapped(self, evaluator: PythonEvaluator) -> None:
        script = evaluator.compile("(_ for _ in ()).throw(BrokenPipeError())")
        with pytest.raises(BrokenPipeError):
            evaluator.invoke(script, "x")


# ---------------------------------------------------------------------------
# require
# ---------------------------------------------------------------------------

class TestRequire:
    def test_binds_module(self, evaluator: PythonEvaluator) -> None:
        evaluator.require("json")
        assert evaluator.invoke(evaluator.compile("json.__name__"), NO_CONTEXT) == "json"

    def test_dotted_name_binds_top_level(self, evaluator: PythonEvaluator) -> None:
        evaluator.require("os.path")
        assert evaluator.namespace["os"] is sys.modules["os"]

    def test_missing_module(self, evaluator: PythonEvaluator) -> None:
        with pytest.raises(RequireError, match="no_such_module_xyz") as exc_info:
            evaluator.require("no_such_module_xyz")
        assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)
        assert exc_info.value.hint

    def test_module_raising_on_import(
        self,
        evaluator: PythonEvaluator,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "rexe_broken_module.py").write_text("raise RuntimeError('nope')\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        try:
            with pytest.raises(RequireError, match="RuntimeError: nope"):
                evaluator.require("rexe_broken_module")
        finally:
            sys.modules.pop("rexe_broken_module", None)


# ---------------------------------------------------------------------------
# execute_file
# ---------------------------------------------------------------------------

class TestExecuteFile:
    def test_definitions_are_shared(
        self, evaluator: PythonEvaluator, tmp_path: Path,
    ) -> None:
        helpers = tmp_path / "helpers.py"
        helpers.write_text("def shout(s):\n    return s.upper() + '!'\n")

        evaluator.execute_file(helpers)

        assert evaluator.invoke(evaluator.compile("shout(self)"), "hi") == "HI!"

    def test_later_files_see_earlier_definitions(
        self, evaluator: PythonEvaluator, tmp_path: Path,
    ) -> None:
        first = tmp_path / "first.py"
        first.write_text("BASE = 10\n")
        second = tmp_path / "second.py"
        second.write_text("DERIVED = BASE * 2\n")

        evaluator.execute_file(first)
        evaluator.execute_file(second)

        assert evaluator.namespace["DERIVED"] == 20

    def test_missing_file(self, evaluator: PythonEvaluator, tmp_path: Path) -> None:
        with pytest.raises(LoadFileNotFoundError, match="missing.py"):
            evaluator.execute_file(tmp_path / "missing.py")

    def test_raising_file_names_path(
        self, evaluator: PythonEvaluator, tmp_path: Path,
    ) -> None:
        bad = tmp_path / "bad.py"
        bad.write_text("1 / 0\n")
        with pytest.raises(EvaluationError, match="bad.py: ZeroDivisionError"):
            evaluator.execute_file(bad)

    def test_syntax_error_in_file(
        self, evaluator: PythonEvaluator, tmp_path: Path,
    ) -> None:
        bad = tmp_path / "bad.py"
        bad.write_text("def (\n")
        with pytest.raises(ScriptSyntaxError, match="bad.py:1"):
            evaluator.execute_file(bad)
