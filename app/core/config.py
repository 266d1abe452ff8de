# /app/core/config.py

"""
Runtime configuration for the academy backend.

Values come from environment variables or a local `.env` file and are read once
and cached. Nothing else in the application calls `os.getenv` directly; the
engine, the security helpers and the startup hook all receive their values from
`get_settings()`. A malformed value fails at startup with a validation error
naming the setting.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Defaults are for local development.
    database_url: str = "sqlite:///./academy.db"
    secret_key: str = "change-me-in-production"
    access_token_expire_minutes: int = Field(default=60 * 12, gt=0)
    log_level: str = "INFO"
    auto_create_tables: bool = True
    admin_login: str = ""
    admin_password: str = ""

    # CORS_ORIGINS is a comma-separated list; only the validator fills `cors_origins`.
    cors_origins_raw: Optional[str] = Field(default=None, validation_alias=AliasChoices("CORS_ORIGINS"))
    cors_origins: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("CORS_ORIGINS_PARSED_DO_NOT_USE"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _split_cors_origins(self) -> "Settings":
        raw = self.cors_origins_raw or "*"
        self.cors_origins = [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]
        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()
