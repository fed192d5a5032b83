"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from pipestore.core.protocols import IPipelineCache, IPipelineStore

__all__ = ["IPipelineCache", "IPipelineStore"]
