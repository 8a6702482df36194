"""Service layer for business logic."""

from chunkservice.services.chunk_service import ChunkService

__all__ = [
    "ChunkService",
]
