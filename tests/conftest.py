"""
Pytest configuration and fixtures for jot tests.

This module provides shared fixtures used across unit and integration tests.
"""

import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from jot.store import ThoughtStore


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[Path, None, None]:
    """
    Keep tests away from the real user data directory and env overrides.

    Pins the platform to Linux and the home directory to a temp path, so
    the platform default is $XDG_DATA_HOME/<app> on every OS. Yields the
    XDG data root.
    """
    home = tmp_path / "home"
    xdg = tmp_path / "xdg-data"
    monkeypatch.delenv("JOT_DATA_DIR", raising=False)
    monkeypatch.delenv("JOT_CONFIG", raising=False)
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    monkeypatch.setenv("XDG_DATA_HOME", str(xdg))
    yield xdg


@pytest.fixture
def store(temp_dir: Path) -> Generator[ThoughtStore, None, None]:
    """An open thought store in a temporary directory."""
    thought_store = ThoughtStore(temp_dir / "jot.db")
    yield thought_store
    thought_store.close()


@pytest.fixture
def sample_config_yaml() -> str:
    """Return a config YAML that changes every setting."""
    return """
list_limit: 3
confirm_delete: false
"""
