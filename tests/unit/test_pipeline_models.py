"""Tests for pipeline models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pipestore.models.pipeline import PipelineCreate, PipelineFind, PipelineRecord


def test_record_defaults_to_no_stages():
    record = PipelineRecord(
        id=1, project_id="proj-a", name="deploy-v1",
        creator_uid=7, updater_uid=7, created_ts=100, updated_ts=100,
    )
    assert record.stages == []


def test_create_requires_project_and_name():
    with pytest.raises(ValidationError):
        PipelineCreate(project_id="", name="deploy-v1")
    with pytest.raises(ValidationError):
        PipelineCreate(project_id="proj-a", name="")


def test_find_defaults_to_no_filters():
    find = PipelineFind()
    assert find.id is None
    assert find.project_id is None
    assert find.limit is None
    assert find.offset is None


@pytest.mark.parametrize("field", ["limit", "offset"])
def test_find_rejects_negative_pagination(field):
    with pytest.raises(ValidationError):
        PipelineFind(**{field: -1})


def test_find_rejects_non_integer_limit():
    with pytest.raises(ValidationError):
        PipelineFind(limit="5; DROP TABLE pipeline")
