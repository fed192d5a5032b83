"""SQL statements for the pipeline table.

Predicate values are always bound parameters. Only LIMIT/OFFSET are written
into the statement text, and only as ints taken from a validated PipelineFind.
"""

from __future__ import annotations

from typing import Any

from pipestore.models.pipeline import PipelineFind

CREATE_PIPELINE_QUERY = """
    INSERT INTO pipeline (
        project_id,
        creator_id,
        updater_id,
        name
    )
    SELECT
        project.id,
        :creator_id,
        :updater_id,
        :name
    FROM project
    WHERE project.resource_id = :project_id
    RETURNING id, created_ts
"""

LIST_PIPELINES_QUERY = """
    SELECT
        pipeline.id,
        pipeline.creator_id,
        pipeline.created_ts,
        pipeline.updater_id,
        pipeline.updated_ts,
        project.resource_id,
        pipeline.name
    FROM pipeline
    LEFT JOIN project ON pipeline.project_id = project.id
    WHERE {where}
    ORDER BY pipeline.id DESC"""

# portable always-true predicate (sqlite has no TRUE literal before 3.23)
_BASE_PREDICATE = "1 = 1"


def build_list_query(find: PipelineFind, dialect: str = "postgresql") -> tuple[str, dict[str, Any]]:
    """Build the SELECT for ``find``.

    Returns:
        Tuple of (sql, params) ready for ``sqlalchemy.text``.
    """
    where: list[str] = [_BASE_PREDICATE]
    params: dict[str, Any] = {}
    if find.id is not None:
        where.append("pipeline.id = :id")
        params["id"] = find.id
    if find.project_id is not None:
        where.append("project.resource_id = :project_id")
        params["project_id"] = find.project_id

    query = LIST_PIPELINES_QUERY.format(where=" AND ".join(where))
    if find.limit is not None:
        query += f" LIMIT {int(find.limit)}"
    elif find.offset is not None and dialect == "sqlite":
        # sqlite only accepts OFFSET after a LIMIT
        query += " LIMIT -1"
    if find.offset is not None:
        query += f" OFFSET {int(find.offset)}"
    return query, params
