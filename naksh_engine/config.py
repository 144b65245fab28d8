"""Service configuration loaded from the environment (``NAKSH_*``) and ``.env``."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NAKSH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    app_name: str = "Naksh Astrology API"
    version: str = "1.0.0"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    default_ayanamsa: str = "lahiri"


@lru_cache
def get_settings() -> Settings:
    return Settings()
