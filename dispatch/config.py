"""Configuration management for the dispatch core."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    storage_backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="Where orders, users and stock are kept",
    )
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis URL")
    redis_key_prefix: str = Field(default="dispatch", description="Namespace for Redis keys")

    # API Configuration
    api_port: int = Field(default=8000, description="API server port")
    api_host: str = Field(default="0.0.0.0", description="API server host")

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "text"] = Field(default="json", description="Log format")

    # Order Settings
    allowed_map_prefixes: list[str] = Field(
        default=[
            "https://www.google.com/maps",
            "https://goo.gl/maps",
            "https://maps.app.goo.gl",
            "https://maps.google.com",
        ],
        description="Accepted prefixes for delivery location links",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
