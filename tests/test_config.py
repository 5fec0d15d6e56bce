"""Tests for configuration module."""

from pathlib import Path

from memoboard.core.config import Settings


def test_default_settings():
    """Settings load with defaults."""
    settings = Settings(
        _env_file=None,  # Don't load .env in tests
    )
    assert settings.store_backend == "rest"
    assert settings.data_dir == Path("data")
    assert settings.port == 3000
    assert settings.allow_anonymous_writes is False


def test_db_path():
    """Database path combines data_dir and db_name."""
    settings = Settings(
        data_dir=Path("/tmp/test"),
        db_name="test.db",
        _env_file=None,
    )
    assert settings.db_path == Path("/tmp/test/test.db")


def test_rest_store_needs_url_and_key():
    """REST backend is unconfigured until both URL and key are set."""
    assert not Settings(_env_file=None).store_configured
    assert not Settings(store_url="http://store.test", _env_file=None).store_configured
    assert Settings(store_url="http://store.test", store_key="anon", _env_file=None).store_configured


def test_sqlite_store_always_configured():
    assert Settings(store_backend="sqlite", _env_file=None).store_configured


def test_unknown_backend_unconfigured():
    assert not Settings(store_backend="mongo", _env_file=None).store_configured


def test_env_prefix(monkeypatch):
    """Environment variables use the MEMOBOARD_ prefix."""
    monkeypatch.setenv("MEMOBOARD_STORE_BACKEND", "sqlite")
    monkeypatch.setenv("MEMOBOARD_ALLOW_ANONYMOUS_WRITES", "true")
    settings = Settings(_env_file=None)
    assert settings.store_backend == "sqlite"
    assert settings.allow_anonymous_writes is True
