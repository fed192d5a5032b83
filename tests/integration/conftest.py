"""Integration test fixtures: PostgreSQL."""

from __future__ import annotations

import os
import sys

import pytest
from sqlalchemy import create_engine

PG_URL = os.environ.get("PIPESTORE_TEST_PG_URL", "")


def _postgres_available() -> bool:
    """Check if PostgreSQL is reachable."""
    if not PG_URL:
        return False
    try:
        engine = create_engine(PG_URL)
        with engine.connect():
            pass
        engine.dispose()
        return True
    except Exception:
        return False


skip_no_postgres = pytest.mark.skipif(
    not _postgres_available(),
    reason="PostgreSQL not available",
)


@pytest.fixture
def pg_engine():
    """Engine with freshly created tables and projects proj-a / proj-b."""
    sys.path.insert(0, str(os.path.join(os.path.dirname(__file__), "..", "..", "scripts")))
    from seed_database import create_tables, seed_projects

    engine = create_engine(PG_URL)
    with engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE IF EXISTS pipeline")
        conn.exec_driver_sql("DROP TABLE IF EXISTS project")
    create_tables(engine)
    seed_projects(engine, ["proj-a", "proj-b"])
    yield engine
    engine.dispose()
