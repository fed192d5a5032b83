"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class DatabaseConfig(BaseSettings):
    """Relational database configuration."""

    model_config = {"env_prefix": "PIPESTORE_DB_"}

    url: str = "sqlite+pysqlite:///:memory:"
    pool_size: int = 5
    pool_timeout: int = 30
    statement_timeout_ms: int | None = None  # PostgreSQL only
    echo: bool = False


class CacheConfig(BaseSettings):
    """Pipeline cache configuration."""

    model_config = {"env_prefix": "PIPESTORE_CACHE_"}

    backend: Literal["memory", "redis"] = "memory"
    max_entries: int | None = None  # memory backend, None = unbounded
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    key_prefix: str = "pipeline:"
    ttl: int | None = None  # redis backend, None = no expiry


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "PIPESTORE_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    database: DatabaseConfig = DatabaseConfig()
    cache: CacheConfig = CacheConfig()
