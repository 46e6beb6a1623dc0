"""rexe — evaluate Python code against standard input from the command line.

Built as a thin option resolver plus an input-mode dispatcher around an
injected script evaluator.
"""

from rexe.version import __version__

__all__: list[str] = ["__version__"]
