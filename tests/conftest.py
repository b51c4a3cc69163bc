"""Shared pytest fixtures for the full sysctlconf test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


_FILES_DIR = Path(__file__).resolve().parent / "files"


@pytest.fixture
def sample_sysctl_path() -> Path:
    """Provide the sample sysctl-style input file shipped with the tests."""

    return _FILES_DIR / "sysctl.conf"


@pytest.fixture
def sample_schema_path() -> Path:
    """Provide the sample YAML schema matching the sample input file."""

    return _FILES_DIR / "schema.yaml"


@pytest.fixture
def write_text_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes UTF-8 text into `tmp_path` and returns its path."""

    def _write(name: str, content: str) -> Path:
        """Write one file below the test temporary directory."""

        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
