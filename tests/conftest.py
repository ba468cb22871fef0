"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Add src to the Python path
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def project_root() -> Path:
    """Project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing a POSIX shell script into tmp_path.

    Scripts stand in for shell one-liners, which the runner cannot express
    because it does not interpret quotes.
    """

    def _write(name: str, body: str) -> Path:
        script = tmp_path / name
        script.write_text(body, encoding="utf-8")
        return script

    return _write
