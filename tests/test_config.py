import pytest

from storefront.core.config import Settings
from storefront.core.exceptions import ConfigurationError


def test_missing_secret_refuses_to_start(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ConfigurationError):
        Settings()


def test_empty_secret_override_is_rejected(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    with pytest.raises(ConfigurationError):
        Settings(JWT_SECRET="")


def test_secret_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("TOKEN_EXPIRE_HOURS", "12")
    settings = Settings()
    assert settings.JWT_SECRET == "from-env"
    assert settings.TOKEN_EXPIRE_HOURS == 12


def test_defaults(monkeypatch):
    for name in ("API_PREFIX", "TOKEN_EXPIRE_HOURS", "MAX_WRITE_ATTEMPTS", "JWT_ALGORITHM"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(JWT_SECRET="s")
    assert settings.API_PREFIX == "/api"
    assert settings.TOKEN_EXPIRE_HOURS == 24
    assert settings.MAX_WRITE_ATTEMPTS == 3
    assert settings.JWT_ALGORITHM == "HS256"


def test_overrides_win_over_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./env.db")
    settings = Settings(JWT_SECRET="s", DATABASE_URL="sqlite://")
    assert settings.DATABASE_URL == "sqlite://"


def test_unknown_override_is_rejected():
    with pytest.raises(ConfigurationError):
        Settings(JWT_SECRET="s", NOT_A_SETTING=1)


def test_write_attempts_must_be_positive():
    with pytest.raises(ConfigurationError):
        Settings(JWT_SECRET="s", MAX_WRITE_ATTEMPTS=0)
