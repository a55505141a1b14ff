"""Pytest configuration for repository test runs."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add the src directory to sys.path so top-level packages import."""
    src_path = Path(__file__).resolve().parent.parent / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolate_migration_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep DESIGN_MIGRATE_* values from the caller's shell out of tests."""
    for env_name in list(os.environ):
        if env_name.startswith("DESIGN_MIGRATE_"):
            monkeypatch.delenv(env_name)
