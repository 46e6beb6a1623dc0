"""Shared pytest fixtures and configuration for the rexe test suite.

Guidelines
----------
* No test reads the real home directory: ``HOME`` points at a temp dir.
* ``REXE_OPTIONS`` is cleared unless a test sets it explicitly.
* Core tests use fake evaluators; only evaluator and app tests run code.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rexe.utils import OPTIONS_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(OPTIONS_ENV_VAR, raising=False)
    return home
