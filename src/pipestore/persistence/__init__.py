"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from pipestore.core.config import AppSettings
from pipestore.core.protocols import IPipelineCache
from pipestore.persistence.memory_backend import MemoryPipelineCache
from pipestore.persistence.redis_backend import RedisPipelineCache
from pipestore.persistence.sql_store import SQLPipelineStore, create_engine_from_settings


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (pipeline_store, cache).
    """
    if settings is None:
        settings = AppSettings()

    cache: IPipelineCache
    if settings.cache.backend == "redis":
        cache = RedisPipelineCache(
            host=settings.cache.host,
            port=settings.cache.port,
            db=settings.cache.db,
            key_prefix=settings.cache.key_prefix,
            ttl=settings.cache.ttl,
        )
    else:
        cache = MemoryPipelineCache(max_entries=settings.cache.max_entries)

    engine = create_engine_from_settings(settings.database)
    pipeline_store = SQLPipelineStore(engine=engine, cache=cache)

    return pipeline_store, cache
