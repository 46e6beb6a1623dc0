"""CLI console helpers with optional Rich support.

All diagnostic and error output goes to stderr through this module;
stdout is reserved for the results of the user code.  Rich is imported
lazily so that ``--help`` and plain filtering keep working when it is
not installed.
"""

from __future__ import annotations

import sys
from typing import Any


def _load_rich_console_class() -> type[Any] | None:
    """Return ``rich.console.Console`` or ``None`` when Rich is missing."""
    try:
        from rich.console import Console
    except ModuleNotFoundError:
        return None
    return Console


def get_rich_console() -> Any | None:
    """Create a Rich console instance targeting stderr, if Rich is available."""
    console_class = _load_rich_console_class()
    if console_class is None:
        return None
    return console_class(stderr=True, soft_wrap=True, emoji=False)


def escape(text: str) -> str:
    """Escape Rich markup in *text*; identity when Rich is missing."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return text
    return rich_escape(text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with a plain-stderr fallback."""

    def print(self, *objects: object, markup: bool = True) -> None:
        """Render with Rich when available, else plain stderr print.

        With ``markup=False`` the text is written verbatim: no markup
        tags and no syntax highlighting.
        """
        rich_console = get_rich_console()
        if rich_console is None:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects, markup=markup, highlight=markup)

    def print_exception(self, exc: BaseException) -> None:
        """Render the traceback of *exc* (and its chained causes)."""
        rich_console = get_rich_console()
        if rich_console is None:
            import traceback

            traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
            return

        from rich.traceback import Traceback

        rich_console.print(
            Traceback.from_exception(type(exc), exc, exc.__traceback__),
        )


console = _ConsoleProxy()
