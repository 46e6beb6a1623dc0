"""CLI application entry point and run orchestration for rexe.

This module is the **sole error boundary** for the entire application.
It catches :class:`~rexe.exceptions.RexeError`, ``BrokenPipeError``,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-facing messages on stderr and returning well-defined exit codes.

Architecture notes
------------------
* Option resolution lives in :mod:`rexe.cli.options`; startup ordering
  and input dispatch live in ``core``; code execution lives in ``infra``.
* stdout carries nothing but the results of the user code.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from rexe.cli import exit_codes
from rexe.cli.console import console, escape
from rexe.cli.diagnostics import Stopwatch, VerboseLogger
from rexe.cli.options import build_parser, resolve_options
from rexe.core.dispatcher import InputModeDispatcher
from rexe.core.startup import StartupLoader
from rexe.exceptions import RexeError, describe_exception
from rexe.infra.python_evaluator import PythonEvaluator
from rexe.utils import OPTIONS_ENV_VAR, default_startup_path


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run rexe.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  ``$REXE_OPTIONS`` is prepended either way.

    Returns
    -------
    int
        OS process exit code.
    """
    stopwatch = Stopwatch()
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    options = resolve_options(argv, os.environ.get(OPTIONS_ENV_VAR), parser)

    if not options.source.strip():
        parser.print_help()
        return exit_codes.SUCCESS

    logger = VerboseLogger(options.verbose)
    logger.log_start(options)

    evaluator = PythonEvaluator()
    try:
        StartupLoader(evaluator, logger, default_startup_path()).load(options)

        script = evaluator.compile(options.source)
        logger.log(f"Input mode: {options.input_mode.description}")

        dispatcher = InputModeDispatcher(evaluator, sys.stdin, sys.stdout)
        dispatcher.run(options.input_mode, script)
    except RexeError as exc:
        if logger.enabled and exc.__cause__ is not None:
            console.print_exception(exc.__cause__)
        raise

    logger.log_elapsed(stopwatch.elapsed())
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _silence_stdout() -> None:
    """Point stdout at ``os.devnull`` so the interpreter's final flush
    cannot raise a second ``BrokenPipeError``."""
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except BrokenPipeError:
        _silence_stdout()
        sys.exit(exit_codes.BROKEN_PIPE)
    except RexeError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {escape(describe_exception(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
