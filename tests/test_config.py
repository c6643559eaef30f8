"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from drivetrack.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("DRIVETRACK_DB_PATH", "DRIVETRACK_USER", "DRIVETRACK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.database_path == str(Path.home() / ".drivetrack" / "drivetrack.db")
    assert settings.default_user == "default"
    assert settings.log_level == "WARNING"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("DRIVETRACK_DB_PATH", str(tmp_path / "d.db"))
    monkeypatch.setenv("DRIVETRACK_USER", "ana")
    monkeypatch.setenv("DRIVETRACK_LOG_LEVEL", "DEBUG")

    settings = get_settings()

    assert settings.database_path == str(tmp_path / "d.db")
    assert settings.default_user == "ana"
    assert settings.log_level == "DEBUG"


def test_settings_are_cached(monkeypatch):
    monkeypatch.setenv("DRIVETRACK_USER", "ana")
    first = get_settings()
    monkeypatch.setenv("DRIVETRACK_USER", "bruno")
    assert get_settings() is first
