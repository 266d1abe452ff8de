# /tests/test_config.py

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults_without_environment(monkeypatch):
    for name in ("DATABASE_URL", "ACCESS_TOKEN_EXPIRE_MINUTES", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///./academy.db"
    assert settings.access_token_expire_minutes == 720
    assert settings.cors_origins == ["*"]


def test_values_are_read_from_the_environment(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://aplus.uz, https://admin.aplus.uz,")
    monkeypatch.setenv("AUTO_CREATE_TABLES", "false")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")

    settings = Settings(_env_file=None)

    assert settings.cors_origins == ["https://aplus.uz", "https://admin.aplus.uz"]
    assert settings.auto_create_tables is False
    assert settings.log_level == "DEBUG"
    assert settings.access_token_expire_minutes == 30


def test_values_are_read_from_an_env_file(tmp_path, monkeypatch):
    for name in ("SECRET_KEY", "ADMIN_LOGIN"):
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("SECRET_KEY=from-the-file\nADMIN_LOGIN=boss\n")

    settings = Settings(_env_file=env_file)

    assert (settings.secret_key, settings.admin_login) == ("from-the-file", "boss")


def test_malformed_value_names_the_setting(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "12h")

    with pytest.raises(ValidationError, match="access_token_expire_minutes"):
        Settings(_env_file=None)
