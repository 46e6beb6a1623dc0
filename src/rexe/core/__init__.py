"""Core layer — option model, startup ordering, and input-mode dispatch.

Rules
-----
* No ``print()`` calls; output streams are injected.
* No code execution of its own; the evaluator owns that.
* No imports from ``cli`` or ``infra``.
"""

from rexe.core.dispatcher import InputModeDispatcher
from rexe.core.models import NO_CONTEXT, CompiledScript, InputMode, Options
from rexe.core.protocols import DiagnosticSink, ScriptEvaluator
from rexe.core.startup import StartupLoader

__all__: list[str] = [
    "NO_CONTEXT",
    "CompiledScript",
    "DiagnosticSink",
    "InputMode",
    "InputModeDispatcher",
    "Options",
    "ScriptEvaluator",
    "StartupLoader",
]
