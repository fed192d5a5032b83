"""Redis cache backend implementing IPipelineCache."""

from __future__ import annotations

import redis
from pydantic import ValidationError

from pipestore.core.exceptions import CacheError
from pipestore.models.pipeline import PipelineRecord


class RedisPipelineCache:
    """Production IPipelineCache backed by Redis, records stored as JSON."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 key_prefix: str = "pipeline:", ttl: int | None = None) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._key_prefix = key_prefix
        self._ttl = ttl
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def _key(self, pipeline_id: int) -> str:
        return f"{self._key_prefix}{pipeline_id}"

    def get(self, pipeline_id: int) -> PipelineRecord | None:
        key = self._key(pipeline_id)
        try:
            raw = self._client.get(key)
        except Exception as exc:
            raise CacheError(f"Redis GET failed for key={key!r}: {exc}") from exc
        if raw is None:
            return None
        try:
            return PipelineRecord.model_validate_json(raw)
        except ValidationError as exc:
            raise CacheError(f"Corrupt cache entry for key={key!r}: {exc}") from exc

    def add(self, pipeline_id: int, record: PipelineRecord) -> None:
        key = self._key(pipeline_id)
        try:
            self._client.set(key, record.model_dump_json(), ex=self._ttl)
        except Exception as exc:
            raise CacheError(f"Redis SET failed for key={key!r}: {exc}") from exc
