"""Infrastructure layer — the concrete code-evaluation backend.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
* Every exception raised by evaluated code is re-raised as a
  :class:`~rexe.exceptions.RexeError` subclass.
"""

from rexe.infra.python_evaluator import PythonEvaluator

__all__: list[str] = ["PythonEvaluator"]
