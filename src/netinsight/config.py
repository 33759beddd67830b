"""Application configuration using Pydantic Settings."""

import logging
import sys
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NetInsightSettings(BaseSettings):
    """Configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="NETINSIGHT_",
        extra="ignore",
    )

    # Requests
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for a single provider attempt in seconds",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts per provider for providers that opt into retrying",
    )
    retry_base_delay: float = Field(
        default=1.0,
        ge=0,
        description="Delay before the first retry in seconds (doubles each time)",
    )
    user_agent: str = Field(
        default="netinsight/0.1",
        description="User-Agent sent to providers",
    )

    # Cache
    cache_enabled: bool = Field(
        default=True,
        description="Enable the in-memory cache",
    )
    cache_ttl: float = Field(
        default=300.0,
        ge=0,
        description="Default cache TTL in seconds",
    )
    interfaces_cache_ttl: float = Field(
        default=60.0,
        ge=0,
        description="Cache TTL for the local interface listing in seconds",
    )

    # Health checks
    health_check_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for provider health probes in seconds",
    )

    # Provider chains, in fallback order
    public_ip_providers: list[str] = Field(
        default=["ipify", "ipify64", "icanhazip"],
        description="Public IP providers in the order they are tried",
    )
    geolocation_providers: list[str] = Field(
        default=["ipapi", "ipwhois", "ipinfo"],
        description="Geolocation providers in the order they are tried",
    )
    ipinfo_token: str | None = Field(
        default=None,
        description="ipinfo.io access token (optional, increases rate limits)",
    )

    # App settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


@lru_cache
def get_settings() -> NetInsightSettings:
    """Get cached settings instance."""
    return NetInsightSettings()


def setup_logging(level: str) -> None:
    """Configure logging for an embedding application."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
