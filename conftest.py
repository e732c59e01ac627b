"""Pytest configuration — ensures the project root is importable."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep a developer's PASSPORT_* variables out of the test run."""
    for name in ("PASSPORT_VALIDATION_MODE", "PASSPORT_LOG_LEVEL", "PASSPORT_MAX_UPLOAD_BYTES"):
        monkeypatch.delenv(name, raising=False)
    yield
