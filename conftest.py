"""Pytest configuration — ensures the project root is importable."""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _clean_amount_env(monkeypatch):
    """Keep a developer's LEDGER_AMOUNTS_* variables out of the suite."""
    for name in list(os.environ):
        if name.startswith("LEDGER_AMOUNTS_"):
            monkeypatch.delenv(name)
    yield
