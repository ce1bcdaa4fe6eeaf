"""Environment-driven configuration for the ProjeX Manager app.

Every setting the service relies on lives on ``AppSettings``. Values come from
the process environment first and then from ``.env``/``.env.local`` files, so
the app boots in development without any extra setup.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "ProjeX Manager"

    # Base folders keep file-path building consistent. ``BASE_DIR`` points to
    # the repository root so template/static directories can be derived.
    BASE_DIR: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    DATA_DIR: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2] / "data")
    TEMPLATES_DIR: Path | None = None
    STATIC_DIR: Path | None = None
    TZ: str = "America/Chicago"

    # SQLite under DATA_DIR unless DATABASE_URL/DB_URL says otherwise.
    DB_URL: str = Field(default="", validation_alias=AliasChoices("DATABASE_URL", "DB_URL"))

    HOST: str = "0.0.0.0"
    PORT: int = 8090

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        return str(value or "INFO").strip().upper()

    @property
    def database_url(self) -> str:
        return self.DB_URL or f"sqlite:///{self.DATA_DIR / 'projex.db'}"


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    settings = AppSettings()
    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    if settings.TEMPLATES_DIR is None:
        settings.TEMPLATES_DIR = settings.BASE_DIR / "app" / "templates"
    if settings.STATIC_DIR is None:
        settings.STATIC_DIR = settings.BASE_DIR / "app" / "static"
    return settings


# Importing ``settings`` anywhere gives the configured values without
# rebuilding the object each time.
settings = get_settings()
