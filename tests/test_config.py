import pytest

from userclient.core.config import Settings, validate_settings


def test_defaults():
    current = Settings(_env_file=None)

    assert current.USERS_API_BASE_URL == "http://localhost:8080/users"
    assert current.USERS_API_TIMEOUT is None
    assert current.is_development
    assert not current.is_production


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("USERS_API_BASE_URL", "https://api.example.com/users/")
    monkeypatch.setenv("USERS_API_TIMEOUT", "4.5")
    monkeypatch.setenv("ENVIRONMENT", "production")

    current = Settings(_env_file=None)

    assert current.USERS_API_BASE_URL == "https://api.example.com/users/"
    assert current.USERS_API_TIMEOUT == 4.5
    assert current.is_production


def test_non_positive_timeout_rejected():
    with pytest.raises(ValueError):
        Settings(_env_file=None, USERS_API_TIMEOUT=0)


def test_validate_settings_accepts_defaults():
    assert validate_settings(Settings(_env_file=None)) is True


def test_validate_settings_reports_every_problem():
    current = Settings(_env_file=None, USERS_API_BASE_URL="ftp://example.com/users", LOG_LEVEL="LOUD")

    with pytest.raises(ValueError) as exc_info:
        validate_settings(current)

    message = str(exc_info.value)
    assert "USERS_API_BASE_URL must be an http(s) URL" in message
    assert "LOG_LEVEL 'LOUD'" in message
