"""Configuration settings for the HTTP provider."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Provider settings loaded from ``WEB3_HTTP_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WEB3_HTTP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render log lines as JSON")

    # HTTP transport
    request_timeout: float = Field(
        default=30.0, gt=0, description="Default per-request timeout in seconds"
    )
    user_agent: str = Field(
        default="web3-providers-http/0.1.0", description="User-Agent header sent with every call"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
