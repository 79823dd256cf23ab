"""
Configuration management for domain-util.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FetchConfig(BaseSettings):
    """Configuration for downloading the reference databases."""

    # Retry defaults used by update_tlds() / update_suffixes()
    retry_count: int = Field(
        default=5, ge=0, description="Maximum number of retries before failing"
    )
    backoff_time: float = Field(
        default=0.2, ge=0.0, description="Initial wait (seconds) after a failure"
    )
    backoff_factor: float = Field(
        default=1.5,
        gt=1.0,
        description="Multiplier applied to the wait after each failure",
    )

    # Transport settings
    request_timeout: float = Field(
        default=30.0, gt=0.0, description="Per-request HTTP timeout in seconds"
    )
    user_agent: str = Field(
        default="domain-util/0.1", description="User-Agent header sent upstream"
    )

    model_config = SettingsConfigDict(env_prefix="DOMAIN_UTIL_FETCH_")


class SourceConfig(BaseSettings):
    """Upstream locations of the suffix databases."""

    tld_url: str = Field(
        default="https://www.iana.org/domains/root/db",
        description="IANA root zone database page (HTML)",
    )
    suffix_url: str = Field(
        default="https://publicsuffix.org/list/public_suffix_list.dat",
        description="Mozilla public suffix list (flat file)",
    )

    model_config = SettingsConfigDict(env_prefix="DOMAIN_UTIL_SOURCE_")


class Config(BaseSettings):
    """Main configuration."""

    # Sub-configs
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    sources: SourceConfig = Field(default_factory=SourceConfig)

    # Global settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_nested_delimiter="__"
    )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
