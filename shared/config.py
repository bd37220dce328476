"""
Shared configuration management for the Access Firewall.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="FIREWALL_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")


class FirewallSettings(BaseConfig):
    """Firewall configuration.

    ``full_uris`` makes the firewall read the full request URL instead of the
    path and resolve named routes as absolute URLs. ``host`` is prepended to
    every redirect target when non-empty.
    """

    full_uris: bool = Field(default=False)
    host: str = Field(default="")
    base_url: str = Field(default="http://localhost")

    # Role lookup used by the middleware
    role_header: str = Field(default="X-User-Role")
    anonymous_role: str = Field(default="anonymous")

    # Compile patterns on registration instead of first use
    validate_patterns: bool = Field(default=False)

    # Decision service
    service_host: str = Field(default="0.0.0.0")
    port: int = Field(default=8013)


@lru_cache()
def get_settings() -> FirewallSettings:
    """Get the process-wide firewall settings."""
    return FirewallSettings()
