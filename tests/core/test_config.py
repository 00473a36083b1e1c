"""Unit tests for core.config."""

import pytest
from pydantic import ValidationError

from dbquery.core.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MYSQL_HOST", raising=False)
    monkeypatch.delenv("TEMPLATE_CACHE_MAX_SIZE", raising=False)
    s = Settings(_env_file=None)
    assert s.MYSQL_HOST == "localhost"
    assert s.MYSQL_PORT == 3306
    assert s.TEMPLATE_CACHE_MAX_SIZE == 512


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MYSQL_HOST", "mysql")
    monkeypatch.setenv("MYSQL_PORT", "3307")
    monkeypatch.setenv("TEMPLATE_CACHE_MAX_SIZE", "0")
    s = Settings(_env_file=None)
    assert s.MYSQL_HOST == "mysql"
    assert s.MYSQL_PORT == 3307
    assert s.TEMPLATE_CACHE_MAX_SIZE == 0


def test_negative_cache_size_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEMPLATE_CACHE_MAX_SIZE", "-1")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_mysql_connect_kwargs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MYSQL_DATABASE", "shop")
    s = Settings(_env_file=None)
    kwargs = s.mysql_connect_kwargs
    assert kwargs["database"] == "shop"
    assert set(kwargs) == {
        "host",
        "port",
        "user",
        "password",
        "database",
        "charset",
        "connect_timeout",
    }
