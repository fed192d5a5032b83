"""Pipeline record, creation payload, and list filter models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class StageRecord(BaseModel):
    """A stage belonging to a pipeline (owned by the stage subsystem)."""

    id: Optional[int] = None
    pipeline_id: Optional[int] = None
    name: str = ""


class PipelineRecord(BaseModel):
    """A pipeline row with its project resolved to a resource identifier."""

    id: int
    project_id: str = ""  # project resource id, "" when the project row is gone
    name: str
    creator_uid: int
    updater_uid: int
    created_ts: int
    updated_ts: int
    stages: list[StageRecord] = Field(default_factory=list)


class PipelineCreate(BaseModel):
    """Fields supplied by the caller when creating a pipeline."""

    project_id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class PipelineFind(BaseModel):
    """Optional equality filters and pagination for listing pipelines."""

    model_config = {"strict": True}

    id: Optional[int] = None
    project_id: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=0)
    offset: Optional[int] = Field(default=None, ge=0)
