"""Startup loading — requires, the startup file, then explicit loads.

The order is fixed: later files may depend on modules and definitions
introduced by earlier steps.  Steps already completed are not rolled
back when a later one fails.
"""

from __future__ import annotations

from pathlib import Path

from rexe.core.models import Options
from rexe.core.protocols import DiagnosticSink, ScriptEvaluator


class StartupLoader:
    """Prepare the evaluation namespace before any input is read.

    Parameters
    ----------
    evaluator:
        Backend that imports modules and executes files.
    logger:
        Verbose diagnostic sink; one line is logged per step.
    startup_path:
        Location of the per-user startup file.  Its absence is not an
        error.
    """

    def __init__(
        self,
        evaluator: ScriptEvaluator,
        logger: DiagnosticSink,
        startup_path: Path,
    ) -> None:
        self._evaluator: ScriptEvaluator = evaluator
        self._logger: DiagnosticSink = logger
        self._startup_path: Path = startup_path

    def load(self, options: Options) -> None:
        """Run every startup step for *options* in order.

        Raises
        ------
        RequireError
            When a required module cannot be imported.
        LoadFileNotFoundError
            When a ``-l`` file does not exist.
        EvaluationError
            When the startup file or a load file raises.
        """
        self.load_requires(options.requires)
        self.load_startup_file()
        self.load_files(options.load_paths)

    def load_requires(self, names: tuple[str, ...]) -> None:
        for name in names:
            self._logger.log(f"Requiring {name}")
            self._evaluator.require(name)

    def load_startup_file(self) -> bool:
        """Execute the startup file if it exists; return whether it ran."""
        path = self._startup_path
        if not path.is_file():
            self._logger.log(f"No startup file at {path}")
            return False
        self._logger.log(f"Loading startup file {path}")
        self._evaluator.execute_file(path)
        return True

    def load_files(self, paths: tuple[Path, ...]) -> None:
        for path in paths:
            self._logger.log(f"Loading {path}")
            self._evaluator.execute_file(path)
