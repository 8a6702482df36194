"""Repository layer for data access."""

from chunkservice.repositories.file_repository import FileRepository
from chunkservice.repositories.chunk_repository import ChunkRepository

__all__ = [
    "FileRepository",
    "ChunkRepository",
]
