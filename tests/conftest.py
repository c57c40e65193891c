"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def scripts_dir() -> Path:
    return FIXTURES_DIR / "scripts"
