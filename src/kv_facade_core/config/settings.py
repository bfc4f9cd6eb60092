"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal
from urllib.parse import urlsplit

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kv_facade_core.constants import DEFAULT_CHUNK_SIZE


class Settings(BaseSettings):
    """Central configuration for kv-facade."""

    model_config = SettingsConfigDict(env_prefix="KVF_", env_file=".env")

    # --- Store ---
    redis_host: str = Field(
        default="localhost",
        description="Key-value store hostname",
    )
    redis_port: int = Field(
        default=6379,
        description="Key-value store port",
    )
    redis_db: int = Field(
        default=0,
        description="Logical database index",
    )
    redis_url: str | None = Field(
        default=None,
        description="Full connection URL; overrides host/port/db when set",
    )
    redis_password: SecretStr | None = Field(
        default=None,
        description="Password forwarded to the store client",
    )
    socket_timeout_seconds: float = Field(
        default=5.0,
        description="Per-command socket timeout in seconds",
    )

    # --- Batching ---
    multi_set_chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        description="Maximum keys or pairs sent in one bulk round-trip",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for shipping",
    )

    @model_validator(mode="after")
    def validate_chunk_size(self) -> Settings:
        """Reject chunk sizes that cannot make progress."""
        if self.multi_set_chunk_size <= 0:
            msg = "multi_set_chunk_size must be a positive integer"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_redis_url(self) -> Settings:
        """Derive host/port from redis_url so instance keys reflect the real target."""
        if self.redis_url:
            parts = urlsplit(self.redis_url)
            if parts.scheme not in ("redis", "rediss", "unix"):
                msg = f"Unsupported redis_url scheme: {parts.scheme!r}"
                raise ValueError(msg)
            if parts.hostname:
                self.redis_host = parts.hostname
            if parts.port:
                self.redis_port = parts.port
        return self
