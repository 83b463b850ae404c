#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
product catalog service. All configuration is centralized here to ensure
consistency across modules.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """
    Cache configuration for the dual-backend cache.

    STAGE-CACHE.0: Backend selection and TTL configuration

    Architectural Decision: Networked first, local fallback
    - CACHE_SERVICE_ADDRESS is probed once at startup
    - An empty address skips the probe and goes straight to the local store
    """

    CACHE_NAMESPACE: str = Field(default="cache:", description="Prefix for every physical cache key")
    CACHE_SERVICE_ADDRESS: str = Field(
        default="redis://localhost:6379",
        description="Networked cache URL (empty disables the networked backend)"
    )
    CACHE_LOCAL_DIRECTORY: str = Field(
        default=".cache/product_catalog",
        description="Directory of the local persistent store"
    )
    CACHE_SOCKET_TIMEOUT: float = Field(default=5, description="Redis connect/socket timeout in seconds")
    CACHE_LIST_TTL: int = Field(default=300, description="Product list cache TTL (5 minutes)")
    CACHE_SEARCH_TTL: int = Field(default=120, description="Search result cache TTL (2 minutes)")

    @field_validator("CACHE_NAMESPACE")
    @classmethod
    def validate_namespace(cls, v):
        """Namespace must be non-empty so prefix deletion stays scoped."""
        if not v:
            raise ValueError("CACHE_NAMESPACE must not be empty")
        return v

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CatalogSettings(BaseSettings):
    """
    Catalog configuration.

    STAGE-CAT.0: Catalog query configuration
    """

    CATALOG_LIST_LIMIT: int = Field(default=100, ge=1, description="Records fetched per list query")
    CATALOG_WATCH_CHANGES: bool = Field(
        default=True,
        description="Invalidate the cache on catalog change feed events"
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ApplicationSettings(BaseSettings):
    """
    General application settings.

    STAGE-0: Application initialization
    """

    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment"
    )
    APP_NAME: str = Field(default="Product Catalog Service", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api/v1", description="Prefix of every API route")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from product_catalog.core.config.settings import get_settings

        settings = get_settings()
        namespace = settings.cache.CACHE_NAMESPACE
    """

    # Cache settings
    CACHE_NAMESPACE: str = Field(default="cache:", description="Prefix for every physical cache key")
    CACHE_SERVICE_ADDRESS: str = Field(
        default="redis://localhost:6379",
        description="Networked cache URL (empty disables the networked backend)"
    )
    CACHE_LOCAL_DIRECTORY: str = Field(
        default=".cache/product_catalog",
        description="Directory of the local persistent store"
    )
    CACHE_SOCKET_TIMEOUT: float = Field(default=5, description="Redis connect/socket timeout in seconds")
    CACHE_LIST_TTL: int = Field(default=300, description="Product list cache TTL (5 minutes)")
    CACHE_SEARCH_TTL: int = Field(default=120, description="Search result cache TTL (2 minutes)")

    # Catalog settings
    CATALOG_LIST_LIMIT: int = Field(default=100, ge=1, description="Records fetched per list query")
    CATALOG_WATCH_CHANGES: bool = Field(
        default=True,
        description="Invalidate the cache on catalog change feed events"
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment"
    )
    APP_NAME: str = Field(default="Product Catalog Service", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api/v1", description="Prefix of every API route")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    # Nested configuration objects
    @property
    def cache(self) -> 'CacheSettings':
        """Get cache settings."""
        return CacheSettings(
            CACHE_NAMESPACE=self.CACHE_NAMESPACE,
            CACHE_SERVICE_ADDRESS=self.CACHE_SERVICE_ADDRESS,
            CACHE_LOCAL_DIRECTORY=self.CACHE_LOCAL_DIRECTORY,
            CACHE_SOCKET_TIMEOUT=self.CACHE_SOCKET_TIMEOUT,
            CACHE_LIST_TTL=self.CACHE_LIST_TTL,
            CACHE_SEARCH_TTL=self.CACHE_SEARCH_TTL
        )

    @property
    def catalog(self) -> 'CatalogSettings':
        """Get catalog settings."""
        return CatalogSettings(
            CATALOG_LIST_LIMIT=self.CATALOG_LIST_LIMIT,
            CATALOG_WATCH_CHANGES=self.CATALOG_WATCH_CHANGES
        )

    @property
    def logging(self) -> 'LoggingSettings':
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.LOG_LEVEL,
            LOG_FORMAT=self.LOG_FORMAT
        )

    @property
    def app(self) -> 'ApplicationSettings':
        """Get application settings."""
        return ApplicationSettings(
            ENVIRONMENT=self.ENVIRONMENT,
            APP_NAME=self.APP_NAME,
            APP_VERSION=self.APP_VERSION,
            API_HOST=self.API_HOST,
            API_PORT=self.API_PORT,
            API_BASE_PATH=self.API_BASE_PATH,
            CORS_ORIGINS=self.CORS_ORIGINS
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    STAGE-0.3: Settings initialization

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
