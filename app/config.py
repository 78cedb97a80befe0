# app/config.py
"""Runtime configuration, read from the environment (and an optional .env)."""
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="products-api", description="Application name")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=5000, description="Listening port")

    # fake auth: a single shared secret compared against the x-auth-token header
    auth_header: str = Field(default="x-auth-token")
    auth_token: str = Field(default="12345")

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # "length" reproduces len(store) + 1 (may reuse ids after a delete),
    # "monotonic" never hands out the same id twice
    id_strategy: Literal["length", "monotonic"] = "length"
    seed_products: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
