from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    # Application
    ENVIRONMENT: Literal["local", "development", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    # Batch top-up inputs/outputs (CLI flags take precedence).
    # Read from TOKEN_TOPUP_* variables only.
    COMPANIES_FILE: str = "./companies.json"
    USERS_FILE: str = "./users.json"
    OUTPUT_FILE: str = "./output.txt"

    model_config = SettingsConfigDict(
        env_prefix="TOKEN_TOPUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()


@lru_cache
def get_settings() -> Settings:
    """
    Return the global settings instance, cached.
    """
    return Settings()
