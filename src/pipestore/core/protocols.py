"""Protocol interfaces for pipestore abstractions.

Structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pipestore.models.pipeline import PipelineCreate, PipelineFind, PipelineRecord


# ---------------------------------------------------------------------------
# Persistence: Pipeline Cache
# ---------------------------------------------------------------------------

@runtime_checkable
class IPipelineCache(Protocol):
    """Id -> pipeline record cache. Implementations must be thread-safe."""

    def get(self, pipeline_id: int) -> PipelineRecord | None: ...

    def add(self, pipeline_id: int, record: PipelineRecord) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: Pipeline Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IPipelineStore(Protocol):
    """Relational pipeline store with write-through caching."""

    def create_pipeline(self, create: PipelineCreate, creator_id: int) -> PipelineRecord: ...

    def list_pipelines(self, find: PipelineFind) -> list[PipelineRecord]: ...

    def get_pipeline_by_id(self, pipeline_id: int) -> PipelineRecord | None: ...
