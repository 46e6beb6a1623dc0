"""Allow ``python -m rexe`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m rexe`` behaves identically to the ``rexe`` console
script.
"""

from __future__ import annotations

from rexe.cli.app import cli

if __name__ == "__main__":
    cli()
