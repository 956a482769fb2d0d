"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from wcag_mcp.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.data_path
    PosixPath('data/wcag.json')
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # WCAG_MCP_DATA_PATH=/srv/wcag.json
    # WCAG_MCP_LOG_LEVEL=DEBUG
    # BRIDGE_API_KEY=s3cret
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, PositiveFloat, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Identity reported to RPC callers."""

    model_config = SettingsConfigDict(
        env_prefix="WCAG_MCP_SERVER_",
        extra="ignore",
    )

    name: str = "wcag-mcp"
    version: str = "2.0.0"
    protocol_version: str = Field(default="2024-11-05", description="MCP protocol revision")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WCAG_MCP_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class HttpSettings(BaseSettings):
    """Listener for the HTTP adapters."""

    model_config = SettingsConfigDict(
        env_prefix="WCAG_MCP_HTTP_",
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    public_url: str | None = Field(
        default=None,
        description="Externally visible base URL advertised in the OpenAPI document",
    )


class BridgeSettings(BaseSettings):
    """REST bridge configuration.

    ``api_key`` unset means the bridge authorizes every caller.
    """

    model_config = SettingsConfigDict(
        env_prefix="WCAG_MCP_BRIDGE_",
        extra="ignore",
    )

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("BRIDGE_API_KEY", "WCAG_MCP_BRIDGE_API_KEY"),
    )
    backend_url: str | None = Field(
        default=None,
        description="JSON-RPC endpoint to call; in-process when unset",
    )
    timeout: PositiveFloat = Field(default=30.0, description="Backend request timeout in seconds")

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_is_unset(cls, v: object) -> object:
        return None if isinstance(v, str) and not v.strip() else v


class WcagSettings(BaseSettings):
    """Root settings for the WCAG server.

    Loads configuration from environment variables with WCAG_MCP_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        WCAG_MCP_DATA_PATH=data/wcag.json
        WCAG_MCP_LOG_FORMAT=json
        WCAG_MCP_HTTP_PORT=9000
        WCAG_MCP_BRIDGE_BACKEND_URL=https://example.org/mcp
    """

    model_config = SettingsConfigDict(
        env_prefix="WCAG_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    data_path: Path = Field(default=Path("data/wcag.json"), description="Built WCAG JSON artifact")

    # Nested settings (loaded with WCAG_MCP_SERVER_, WCAG_MCP_LOG_, etc.)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    bridge: BridgeSettings = Field(default_factory=BridgeSettings)


@lru_cache(maxsize=1)
def get_settings() -> WcagSettings:
    """Get the process settings instance (cached)."""
    return WcagSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
