"""Option resolution — environment prefix plus command-line parsing.

Resolution happens in two steps:

1. :func:`merge_env_options` shell-splits ``REXE_OPTIONS`` and puts the
   tokens *before* the real arguments, so explicit options override
   environment ones wherever the last occurrence wins.
2. :func:`parse_options` runs the combined list through ``argparse``
   and freezes the result into an :class:`~rexe.core.models.Options`.

Usage errors are reported by ``argparse`` itself, which exits with
status ``2`` before anything else has happened.
"""

from __future__ import annotations

import argparse
import shlex
from collections.abc import Sequence
from pathlib import Path

from rexe.core.models import InputMode, Options
from rexe.exceptions import UsageError
from rexe.utils import OPTIONS_ENV_VAR, STARTUP_FILENAME
from rexe.version import __version__


# ---------------------------------------------------------------------------
# Environment prefix
# ---------------------------------------------------------------------------

def merge_env_options(argv: Sequence[str], env_value: str | None) -> list[str]:
    """Return *argv* with the shell-split *env_value* tokens prepended.

    An unset, empty, or whitespace-only *env_value* leaves *argv* as is.
    Quoting and backslash escapes follow POSIX shell rules.
    """
    if not env_value or not env_value.strip():
        return list(argv)
    return [*shlex.split(env_value), *argv]


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _RequireAction(argparse.Action):
    """Append each comma-separated, stripped name to the destination list."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: object,
        option_string: str | None = None,
    ) -> None:
        names = list(getattr(namespace, self.dest) or [])
        names.extend(
            name.strip() for name in str(values).split(",") if name.strip()
        )
        setattr(namespace, self.dest, names)


def _input_mode(code: str) -> InputMode:
    """``argparse`` type converter for ``-m``."""
    try:
        return InputMode.from_code(code)
    except UsageError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _epilog() -> str:
    modes = "\n".join(
        f"  {mode.code}  {mode.description}" for mode in InputMode
    )
    return (
        "input modes:\n"
        f"{modes}\n"
        "\n"
        f"Options in ${OPTIONS_ENV_VAR} are prepended to the command line.\n"
        f"~/{STARTUP_FILENAME} is executed, if present, after requires and "
        "before -l files.\n"
        "\n"
        "examples:\n"
        "  ls | rexe 'self.upper()'\n"
        "  ls | rexe -me 'len(list(self))'\n"
        "  rexe -mn -r json 'json.dumps({\"a\": 1})'"
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="rexe",
        usage="%(prog)s [options] [source ...]",
        description="Evaluate Python code against standard input.",
        epilog=_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-l",
        "--load",
        dest="load_paths",
        action="append",
        type=Path,
        default=[],
        metavar="PATH",
        help="Python file to execute before the source (repeatable).",
    )
    parser.add_argument(
        "-m",
        "--mode",
        dest="input_mode",
        type=_input_mode,
        default=InputMode.LINE_STRING,
        metavar="{" + "|".join(InputMode.codes()) + "}",
        help="input mode (default: s); see below.",
    )
    parser.add_argument(
        "-r",
        "--require",
        dest="requires",
        action=_RequireAction,
        default=[],
        metavar="NAMES",
        help="comma-separated modules to import first (repeatable).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="log diagnostics to stderr.",
    )
    parser.add_argument(
        "source",
        nargs="*",
        help="Python source; all words are joined with single spaces.",
    )
    return parser


def parse_options(
    argv: Sequence[str],
    parser: argparse.ArgumentParser | None = None,
) -> Options:
    """Parse *argv* into an :class:`Options` record.

    Options and source words may be intermixed; ``--`` ends option
    processing so the source itself may start with ``-``.
    """
    if parser is None:
        parser = build_parser()
    words = list(argv)
    tail: list[str] = []
    if "--" in words:
        split_at = words.index("--")
        words, tail = words[:split_at], words[split_at + 1:]
    args = parser.parse_intermixed_args(words)
    source = [*(args.source or []), *tail]
    return Options(
        input_mode=args.input_mode,
        requires=tuple(args.requires),
        load_paths=tuple(args.load_paths),
        verbose=args.verbose,
        source=" ".join(source),
    )


def resolve_options(
    argv: Sequence[str],
    env_value: str | None,
    parser: argparse.ArgumentParser | None = None,
) -> Options:
    """Merge the environment prefix into *argv* and parse the result.

    A malformed *env_value* (e.g. an unclosed quote) is a usage error.
    """
    if parser is None:
        parser = build_parser()
    try:
        merged = merge_env_options(argv, env_value)
    except ValueError as exc:
        parser.error(f"${OPTIONS_ENV_VAR}: {exc}")
    return parse_options(merged, parser)
