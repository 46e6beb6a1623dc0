"""Shared constants and small path helpers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from __future__ import annotations

from pathlib import Path

OPTIONS_ENV_VAR: str = "REXE_OPTIONS"
"""Environment variable whose shell-split content is prepended to argv."""

STARTUP_FILENAME: str = ".rexerc"
"""Name of the per-user startup file, looked up in the home directory."""

SCRIPT_FILENAME: str = "<rexe>"
"""Pseudo filename reported in tracebacks for command-line source."""


def default_startup_path(home: Path | None = None) -> Path:
    """Return the startup file location under *home* (default: ``Path.home()``)."""
    base = home if home is not None else Path.home()
    return base / STARTUP_FILENAME


__all__: list[str] = [
    "OPTIONS_ENV_VAR",
    "SCRIPT_FILENAME",
    "STARTUP_FILENAME",
    "default_startup_path",
]
