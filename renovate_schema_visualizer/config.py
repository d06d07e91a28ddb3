from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCHEMA_URL = "https://docs.renovatebot.com/renovate-schema.json"
DEFAULT_MAX_DEPTH = 200
MODES = ("JSON", "JSON5")


class Settings(BaseSettings):
    """Runtime settings; every field can be overridden with RENOVATE_VIZ_<FIELD>."""

    schema_url: str = DEFAULT_SCHEMA_URL
    timeout: float = 10.0
    max_retries: int = 2
    backoff: float = 0.5
    max_depth: int = DEFAULT_MAX_DEPTH
    default_mode: str = "JSON5"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="RENOVATE_VIZ_")

    @field_validator("default_mode", "log_level", mode="before")
    @classmethod
    def _upper(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("default_mode")
    @classmethod
    def _known_mode(cls, value: str) -> str:
        if value not in MODES:
            raise ValueError(f"default_mode must be one of {', '.join(MODES)}, got {value!r}")
        return value

    @field_validator("max_depth")
    @classmethod
    def _positive_depth(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_depth must be at least 1")
        return value


def get_settings() -> Settings:
    return Settings()
