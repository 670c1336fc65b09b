import pytest

from brigadas.core.config import Settings, get_settings
from brigadas.core.exceptions import ConfigurationError


def make_settings(**overrides):
    values = {
        "db_server": "db.local",
        "db_user": "bomberos",
        "db_password": "secreto",
        "db_database": "brigadas",
    }
    values.update(overrides)
    return Settings(**values)


def test_missing_database_variable_is_reported(monkeypatch):
    """A missing required variable fails with its name in the message"""
    # Setup
    monkeypatch.delenv("DB_SERVER", raising=False)

    # Execute
    with pytest.raises(ConfigurationError) as exc_info:
        get_settings()

    # Verify
    assert "DB_SERVER" in exc_info.value.message
    assert exc_info.value.context["variables"] == ["DB_SERVER"]


def test_blank_database_variable_is_rejected(monkeypatch):
    """An empty credential counts as missing"""
    monkeypatch.setenv("DB_PASSWORD", "   ")

    with pytest.raises(ConfigurationError) as exc_info:
        get_settings()

    assert "DB_PASSWORD" in exc_info.value.message


def test_defaults():
    settings = make_settings()

    assert settings.db_port == 5432
    assert settings.db_pool_max == 10
    assert settings.db_pool_idle_timeout == 30
    assert settings.port == 3000
    assert settings.cors_origins_list == ["*"]
    assert settings.is_production is False


def test_database_url_is_built_from_components():
    settings = make_settings(db_port=6543)

    url = settings.database_url

    assert url.drivername == "postgresql+asyncpg"
    assert url.host == "db.local"
    assert url.port == 6543
    assert url.username == "bomberos"
    assert url.password == "secreto"
    assert url.database == "brigadas"


def test_cors_origins_are_split_on_commas():
    settings = make_settings(client_url="http://localhost:5173, https://brigadas.example ,")

    assert settings.cors_origins_list == [
        "http://localhost:5173",
        "https://brigadas.example",
    ]


def test_production_environment_is_case_insensitive():
    assert make_settings(environment="Production").is_production is True
