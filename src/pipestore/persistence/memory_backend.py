"""In-memory pipeline cache: dict-backed, thread-safe."""

from __future__ import annotations

import threading
from collections import OrderedDict

from pipestore.models.pipeline import PipelineRecord


class MemoryPipelineCache:
    """Dict-backed IPipelineCache with optional LRU bound."""

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._max_entries = max_entries
        self._store: OrderedDict[int, PipelineRecord] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, pipeline_id: int) -> PipelineRecord | None:
        with self._lock:
            record = self._store.get(pipeline_id)
            if record is not None:
                self._store.move_to_end(pipeline_id)
            return record

    def add(self, pipeline_id: int, record: PipelineRecord) -> None:
        with self._lock:
            self._store[pipeline_id] = record
            self._store.move_to_end(pipeline_id)
            if self._max_entries is not None:
                while len(self._store) > self._max_entries:
                    self._store.popitem(last=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
