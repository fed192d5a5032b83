"""Create the project/pipeline tables and seed projects.

Usage:
    python scripts/seed_database.py --url postgresql+psycopg2://localhost/pipestore --project proj-a
"""

from __future__ import annotations

import argparse
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

TABLE_DEFINITIONS: dict[str, list[str]] = {
    "postgresql": [
        """
        CREATE TABLE IF NOT EXISTS project (
            id SERIAL PRIMARY KEY,
            resource_id TEXT NOT NULL UNIQUE
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS pipeline (
            id SERIAL PRIMARY KEY,
            project_id INTEGER NOT NULL REFERENCES project (id),
            creator_id INTEGER NOT NULL,
            updater_id INTEGER NOT NULL,
            created_ts BIGINT NOT NULL DEFAULT extract(epoch from now())::bigint,
            updated_ts BIGINT NOT NULL DEFAULT extract(epoch from now())::bigint,
            name TEXT NOT NULL
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_pipeline_project_id ON pipeline (project_id)",
    ],
    "sqlite": [
        """
        CREATE TABLE IF NOT EXISTS project (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            resource_id TEXT NOT NULL UNIQUE
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS pipeline (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            project_id INTEGER NOT NULL REFERENCES project (id),
            creator_id INTEGER NOT NULL,
            updater_id INTEGER NOT NULL,
            created_ts INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
            updated_ts INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
            name TEXT NOT NULL
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_pipeline_project_id ON pipeline (project_id)",
    ],
}


def create_tables(engine: Engine) -> None:
    """Create the project and pipeline tables. Skips tables that already exist."""
    dialect = engine.dialect.name
    if dialect not in TABLE_DEFINITIONS:
        raise ValueError(f"Unsupported dialect {dialect!r}")
    with engine.begin() as conn:
        for ddl in TABLE_DEFINITIONS[dialect]:
            conn.exec_driver_sql(ddl)
    print(f"  Created tables on {dialect}")


def seed_projects(engine: Engine, resource_ids: list[str]) -> dict[str, Any]:
    """Insert projects that do not exist yet.

    Returns:
        Mapping of resource id -> internal project id.
    """
    ids: dict[str, Any] = {}
    with engine.begin() as conn:
        for resource_id in resource_ids:
            existing = conn.execute(
                text("SELECT id FROM project WHERE resource_id = :resource_id"),
                {"resource_id": resource_id},
            ).scalar()
            if existing is None:
                existing = conn.execute(
                    text("INSERT INTO project (resource_id) VALUES (:resource_id) RETURNING id"),
                    {"resource_id": resource_id},
                ).scalar_one()
                print(f"  Created project {resource_id} (id={existing})")
            else:
                print(f"  Project {resource_id} already exists, skipping")
            ids[resource_id] = existing
    return ids


def main() -> None:
    parser = argparse.ArgumentParser(description="Create and seed pipestore tables")
    parser.add_argument("--url", required=True, help="SQLAlchemy database URL")
    parser.add_argument(
        "--project", action="append", default=[], dest="projects",
        help="Project resource id to seed (repeatable)",
    )
    args = parser.parse_args()

    engine = create_engine(args.url)
    print("Creating tables...")
    create_tables(engine)
    if args.projects:
        print("Seeding projects...")
        seed_projects(engine, args.projects)
    print("Done.")


if __name__ == "__main__":
    main()
