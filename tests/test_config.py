"""Tests for configuration loading."""
import pytest

from booklib.config import Config
from booklib.errors import ConfigError


def test_defaults(monkeypatch):
    """Test default values without environment overrides."""
    for name in ("CATALOG_STORAGE_PATH", "CATALOG_BACKEND", "CATALOG_ATOMIC_WRITES"):
        monkeypatch.delenv(name, raising=False)

    config = Config()

    assert config.STORAGE_PATH == "books.json"
    assert config.BACKEND == "file"
    assert config.ATOMIC_WRITES is True
    assert config.use_sql is False


def test_environment_overrides(monkeypatch):
    """Test values are read from the environment."""
    monkeypatch.setenv("CATALOG_STORAGE_PATH", "/tmp/catalog.json")
    monkeypatch.setenv("CATALOG_BACKEND", "Postgres")
    monkeypatch.setenv("CATALOG_ATOMIC_WRITES", "0")
    monkeypatch.setenv("DB_USER", "reader")
    monkeypatch.setenv("DB_PASSWORD", "secret")
    monkeypatch.setenv("DB_HOST", "db")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_NAME", "catalog")

    config = Config()

    assert config.STORAGE_PATH == "/tmp/catalog.json"
    assert config.use_sql is True
    assert config.ATOMIC_WRITES is False
    assert config.DATABASE_URL == "postgresql://reader:secret@db:6543/catalog"


def test_arguments_win_over_environment(monkeypatch):
    """Test explicit arguments take precedence."""
    monkeypatch.setenv("CATALOG_BACKEND", "postgres")

    config = Config(storage_path="mine.json", backend="file", atomic_writes=False)

    assert config.STORAGE_PATH == "mine.json"
    assert config.BACKEND == "file"
    assert config.ATOMIC_WRITES is False


def test_unknown_backend():
    """Test an unknown backend selector is rejected."""
    with pytest.raises(ConfigError):
        Config(backend="mongo")
