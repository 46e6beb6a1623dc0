"""Verbose diagnostic log written to stderr.

Satisfies :class:`~rexe.core.protocols.DiagnosticSink`.  When disabled
the logger has no side effects at all; callers that need to compute
something for a message (a timestamp, say) check :attr:`enabled` first.
"""

from __future__ import annotations

import time
from datetime import datetime

from rexe.cli.console import console
from rexe.core.models import Options
from rexe.version import __version__


class VerboseLogger:
    """One-line-per-message stderr sink, active only in verbose mode."""

    def __init__(self, enabled: bool = False) -> None:
        self._enabled: bool = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def log(self, message: str) -> None:
        if not self._enabled:
            return
        console.print(message, markup=False)

    # ------------------------------------------------------------------
    # Run-level messages
    # ------------------------------------------------------------------

    def log_start(self, options: Options) -> None:
        """Log the banner, the resolved options, and the source text."""
        if not self._enabled:
            return
        started_at = datetime.now().astimezone().isoformat(timespec="seconds")
        self.log(f"rexe version {__version__} -- {started_at}")
        self.log(
            f"Options: mode={options.input_mode.code}, "
            f"requires={list(options.requires)}, "
            f"loads={[str(path) for path in options.load_paths]}",
        )
        self.log(f"Source code: {options.source}")

    def log_elapsed(self, seconds: float) -> None:
        self.log(f"rexe time elapsed: {seconds:.4f} seconds.")


class Stopwatch:
    """Measure wall-clock time for the whole run.

    Always running, regardless of verbosity; only reported in verbose
    mode.
    """

    def __init__(self) -> None:
        self._started: float = time.perf_counter()

    def elapsed(self) -> float:
        return time.perf_counter() - self._started
