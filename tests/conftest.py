"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    # Keep tests away from a developer's real configuration and remote session
    monkeypatch.delenv("PREFS_CONFIG", raising=False)
    monkeypatch.delenv("PREFS_REMOTE_CODEBASE", raising=False)
    from prefs_lib import remote
    remote.reset_session()
    yield
    remote.reset_session()
