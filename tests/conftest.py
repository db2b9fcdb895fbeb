"""Shared pytest fixtures for the full sentsort test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

_SAMPLE_INPUT_PATH = Path(__file__).resolve().parents[1] / "samples" / "in" / "small.in"


@pytest.fixture
def sample_input_path() -> Path:
    """Provide the bundled sample input used by the CLI defaults."""

    return _SAMPLE_INPUT_PATH


@pytest.fixture
def write_input(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes UTF-8 input text and returns its path."""

    def _write(content: str, name: str = "input.txt") -> Path:
        """Write `content` to a file under `tmp_path`."""

        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
