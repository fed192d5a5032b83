"""Relational backend implementing IPipelineStore with write-through caching."""

from __future__ import annotations

import logging
import threading
from contextlib import nullcontext
from typing import Any

import sqlalchemy
from sqlalchemy import make_url, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from pipestore.core.config import DatabaseConfig
from pipestore.core.exceptions import CacheError, ConflictError, DatabaseError, format_empty_row_error
from pipestore.core.protocols import IPipelineCache
from pipestore.models.pipeline import PipelineCreate, PipelineFind, PipelineRecord
from pipestore.persistence.query import CREATE_PIPELINE_QUERY, build_list_query

logger = logging.getLogger(__name__)


def create_engine_from_settings(config: DatabaseConfig) -> Engine:
    """Create a pooled SQLAlchemy engine from database settings."""
    kwargs: dict[str, Any] = {"echo": config.echo}
    url = make_url(config.url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            # one shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = config.pool_size
        kwargs["max_overflow"] = config.pool_size * 2
        kwargs["pool_timeout"] = config.pool_timeout
        kwargs["pool_pre_ping"] = True
        if config.statement_timeout_ms is not None and url.get_backend_name() == "postgresql":
            kwargs["connect_args"] = {"options": f"-c statement_timeout={config.statement_timeout_ms}"}
    return sqlalchemy.create_engine(url, **kwargs)


def _row_to_record(row: Any) -> PipelineRecord:
    resource_id = row["resource_id"]
    if resource_id is None:
        logger.warning("pipeline %s references a missing project", row["id"])
        resource_id = ""
    return PipelineRecord(
        id=row["id"],
        creator_uid=row["creator_id"],
        created_ts=row["created_ts"],
        updater_uid=row["updater_id"],
        updated_ts=row["updated_ts"],
        project_id=resource_id,
        name=row["name"],
    )


class SQLPipelineStore:
    """Production IPipelineStore backed by a SQLAlchemy engine + injected cache."""

    def __init__(self, engine: Engine, cache: IPipelineCache) -> None:
        self._engine = engine
        self._cache = cache
        self._dialect = engine.dialect.name
        # a StaticPool hands every caller the same DBAPI connection
        self._lock = threading.Lock() if isinstance(engine.pool, StaticPool) else None

    def _serialized(self):
        return self._lock if self._lock is not None else nullcontext()

    def _write_through(self, pipelines: list[PipelineRecord]) -> None:
        """Cache committed records. The database stays authoritative on cache failure."""
        for pipeline in pipelines:
            try:
                self._cache.add(pipeline.id, pipeline)
            except CacheError as exc:
                logger.warning("pipeline cache add failed id=%s: %s", pipeline.id, exc)

    # ---- IPipelineStore methods ----

    def create_pipeline(self, create: PipelineCreate, creator_id: int) -> PipelineRecord:
        params = {
            "project_id": create.project_id,
            "creator_id": creator_id,
            "updater_id": creator_id,
            "name": create.name,
        }
        try:
            with self._serialized(), self._engine.begin() as conn:
                row = conn.execute(text(CREATE_PIPELINE_QUERY), params).mappings().first()
                if row is None:
                    logger.warning("no project with resource id %r, pipeline not created", create.project_id)
                    # raising inside begin() rolls the transaction back
                    raise format_empty_row_error(CREATE_PIPELINE_QUERY)
                pipeline = PipelineRecord(
                    id=row["id"],
                    project_id=create.project_id,
                    name=create.name,
                    creator_uid=creator_id,
                    updater_uid=creator_id,
                    created_ts=row["created_ts"],
                    updated_ts=row["created_ts"],
                )
        except SQLAlchemyError as exc:
            raise DatabaseError(f"create pipeline failed: {exc}") from exc

        self._write_through([pipeline])
        logger.info("created pipeline id=%s project=%s name=%r", pipeline.id, pipeline.project_id, pipeline.name)
        return pipeline

    def list_pipelines(self, find: PipelineFind) -> list[PipelineRecord]:
        query, params = build_list_query(find, dialect=self._dialect)
        logger.debug("list pipelines: %s params=%s", " ".join(query.split()), params)
        try:
            with self._serialized(), self._engine.connect() as conn:
                if self._dialect == "postgresql":
                    conn = conn.execution_options(postgresql_readonly=True)
                with conn.begin():
                    rows = conn.execute(text(query), params).mappings().all()
                    pipelines = [_row_to_record(row) for row in rows]
        except SQLAlchemyError as exc:
            raise DatabaseError(f"list pipelines failed: {exc}") from exc

        self._write_through(pipelines)
        return pipelines

    def get_pipeline_by_id(self, pipeline_id: int) -> PipelineRecord | None:
        cached = self._cache.get(pipeline_id)
        if cached is not None:
            logger.debug("pipeline cache hit id=%s", pipeline_id)
            return cached

        logger.debug("pipeline cache miss id=%s", pipeline_id)
        pipelines = self.list_pipelines(PipelineFind(id=pipeline_id))
        if not pipelines:
            return None
        if len(pipelines) > 1:
            raise ConflictError(f"found {len(pipelines)} pipelines, expect 1")
        return pipelines[0]
