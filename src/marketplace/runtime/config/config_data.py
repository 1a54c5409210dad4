"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class RedisConfig(BaseModel):
    """Redis configuration model (session storage backend)."""

    enabled: bool = Field(default=False, description="Enable Redis session storage")
    url: str = Field(default="", description="Redis connection URL")
    password: str | None = Field(
        default=None, description="Password for Redis authentication"
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the Redis connection string with password if provided."""
        if self.password and "@" not in self.url:
            parts = self.url.split("://", 1)
            if len(parts) == 2:
                scheme, rest = parts
                return f"{scheme}://:{self.password}@{rest}"
        return self.url


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./marketplace.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    auto_create: bool = Field(
        default=False, description="Create missing tables at application startup"
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class MediaConfig(BaseModel):
    """Media host (Cloudinary upload API) configuration."""

    cloud_name: str = Field(default="", description="Media host cloud name")
    api_key: str = Field(default="", description="Media host API key")
    api_secret: str = Field(default="", description="Media host API secret")
    folder: str = Field(default="products", description="Target upload folder")
    upload_base_url: str = Field(
        default="https://api.cloudinary.com/v1_1",
        description="Base URL of the upload API",
    )
    timeout_seconds: float = Field(
        default=30.0, description="Timeout for a single upload request"
    )

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    session_max_age: int = Field(
        default=3600, description="Session maximum age in seconds"
    )
    session_cookie_name: str = Field(
        default="user_session_id", description="Cookie carrying the session id"
    )
    csrf_signing_secret: str | None = Field(
        default=None, description="Secret for signing CSRF tokens"
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class SecurityConfig(BaseModel):
    """Security configuration for sessions and state-changing requests."""

    secure_cookies: bool = Field(
        default=True, description="Force secure cookies in production"
    )
    cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="lax", description="SameSite cookie attribute"
    )
    csrf_header_name: str = Field(
        default="X-CSRF-Token", description="Header name for CSRF tokens"
    )
    csrf_token_max_age_hours: int = Field(
        default=24, description="Maximum age for CSRF tokens in hours"
    )
    session_issuer_key: str = Field(
        default="",
        description="Shared key the identity provider presents to open sessions; empty disables it",
    )
    session_issuer_header: str = Field(
        default="X-Session-Issuer-Key", description="Header carrying the issuer key"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    redis: RedisConfig = Field(
        default_factory=RedisConfig, description="Redis configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    media: MediaConfig = Field(
        default_factory=MediaConfig, description="Media host configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    security: SecurityConfig = Field(
        default_factory=SecurityConfig, description="Security configuration"
    )
