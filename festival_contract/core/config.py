"""
Verifier Configuration

Settings class using pydantic-settings for environment variable loading.
Defines the upstream endpoint and the performance bounds the checks apply.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_FESTIVALS_API_URL = "https://eacp.energyaustralia.com.au/codingtest/api/v1/festivals"


class Settings(BaseSettings):
    """
    Verifier settings loaded from environment variables.

    Every setting can be overridden with a FESTIVAL_CONTRACT_ prefixed
    variable, e.g. FESTIVAL_CONTRACT_LATENCY_THRESHOLD_MS=500.
    """

    model_config = SettingsConfigDict(
        env_prefix="FESTIVAL_CONTRACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream
    festivals_api_url: str = Field(
        default=DEFAULT_FESTIVALS_API_URL,
        description="Festivals listing endpoint",
    )
    accept_header: str = Field(
        default="text/plain",
        description="Value sent in the accept header of every request",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Transport timeout for a single request",
    )

    # Contract bounds
    latency_threshold_ms: float = Field(
        default=800,
        gt=0,
        description="Exclusive upper bound on response duration (default: 800ms)",
    )
    require_non_empty: bool = Field(
        default=True,
        description="Healthy-path mode: an empty payload is a schema error",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level for the CLI")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache so settings are only loaded once per process.

    Returns:
        Settings: Verifier settings instance

    Example:
        >>> settings = get_settings()
        >>> settings.latency_threshold_ms
        800.0
    """
    return Settings()
