"""Shared test doubles and SQLite schema helpers."""

from __future__ import annotations

from sqlalchemy.engine import Engine

from pipestore.persistence.memory_backend import MemoryPipelineCache

PROJECT_DDL = """
CREATE TABLE project (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    resource_id TEXT NOT NULL UNIQUE
)
"""

PIPELINE_DDL = """
CREATE TABLE pipeline (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INTEGER NOT NULL REFERENCES project (id),
    creator_id INTEGER NOT NULL,
    updater_id INTEGER NOT NULL,
    created_ts INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    updated_ts INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    name TEXT NOT NULL
)
"""

# No key on id, so tests can plant duplicate rows.
UNKEYED_PIPELINE_DDL = """
CREATE TABLE pipeline (
    id INTEGER NOT NULL,
    project_id INTEGER NOT NULL,
    creator_id INTEGER NOT NULL,
    updater_id INTEGER NOT NULL,
    created_ts INTEGER NOT NULL,
    updated_ts INTEGER NOT NULL,
    name TEXT NOT NULL
)
"""


def create_schema(engine: Engine, pipeline_ddl: str = PIPELINE_DDL) -> None:
    """Create the project and pipeline tables on a SQLite engine."""
    with engine.begin() as conn:
        conn.exec_driver_sql(PROJECT_DDL)
        conn.exec_driver_sql(pipeline_ddl)


def insert_project(engine: Engine, resource_id: str) -> int:
    """Insert a project row and return its internal id."""
    with engine.begin() as conn:
        cursor = conn.exec_driver_sql(
            "INSERT INTO project (resource_id) VALUES (?)", (resource_id,)
        )
        return cursor.lastrowid


def insert_pipeline_row(engine: Engine, **row) -> None:
    """Insert a pipeline row directly, bypassing the store."""
    columns = ", ".join(row)
    placeholders = ", ".join("?" for _ in row)
    with engine.begin() as conn:
        conn.exec_driver_sql(
            f"INSERT INTO pipeline ({columns}) VALUES ({placeholders})", tuple(row.values())
        )


def count_pipelines(engine: Engine) -> int:
    with engine.connect() as conn:
        return conn.exec_driver_sql("SELECT COUNT(*) FROM pipeline").scalar_one()


__all__ = [
    "MemoryPipelineCache",
    "count_pipelines",
    "create_schema",
    "insert_pipeline_row",
    "insert_project",
]
