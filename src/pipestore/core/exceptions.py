"""pipestore exception hierarchy."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INTERNAL = "internal"
    EMPTY_RESULT = "empty_result"
    CONFLICT = "conflict"


class PipestoreError(Exception):
    """Base exception for all pipestore errors."""

    code: ErrorCode = ErrorCode.INTERNAL


class DatabaseError(PipestoreError):
    """Database driver error, original exception available as __cause__."""


class EmptyResultError(PipestoreError):
    """A statement expected to return a row returned none."""

    code = ErrorCode.EMPTY_RESULT

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"query returned no row: {' '.join(query.split())}")


class ConflictError(PipestoreError):
    """More rows matched than the identifier allows."""

    code = ErrorCode.CONFLICT


class CacheError(PipestoreError):
    """Cache backend operation failed."""


def format_empty_row_error(query: str) -> EmptyResultError:
    """Wrap a no-rows condition for ``query`` into a structured error."""
    return EmptyResultError(query)
