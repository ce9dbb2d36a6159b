"""Application settings via pydantic-settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """mrusim configuration.

    Values are loaded from environment variables, falling back to a ``.env``
    file in the project root.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # External APIs
    anthropic_api_key: str = ""

    # Analogy collaborator
    analogy_enabled: bool = True
    analogy_model: str = "claude-haiku-4-5-20251001"
    analogy_max_tokens: int = 300
    analogy_timeout_s: float = 30.0
    analogy_max_retries: int = 2

    # Logging
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
