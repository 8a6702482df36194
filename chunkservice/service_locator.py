"""Service locator for the process-wide chunk service."""

import random
from typing import Optional

from chunkservice import config
from chunkservice.services.chunk_service import ChunkService
from storage.filesystem_provider import FileSystemStorageProvider
from storage.registry import ProviderRegistry
from storage.sqlite_provider import SQLiteStorageProvider

_chunk_service: Optional[ChunkService] = None


def build_default_registry() -> ProviderRegistry:
    """Filesystem and SQLite providers at the configured locations."""
    return ProviderRegistry([
        FileSystemStorageProvider(config.CHUNK_STORAGE_PATH),
        SQLiteStorageProvider(config.BLOB_DATABASE_PATH),
    ])


def build_default_service() -> ChunkService:
    return ChunkService(
        registry=build_default_registry(),
        rng=random.Random(config.RANDOM_SEED),
        verify_chunk_checksums=config.VERIFY_CHUNK_CHECKSUMS,
    )


def set_chunk_service(service: Optional[ChunkService]) -> None:
    """Set global chunk service instance"""
    global _chunk_service
    _chunk_service = service


def get_chunk_service() -> ChunkService:
    """Get global chunk service instance, creating the default one on first use"""
    global _chunk_service
    if _chunk_service is None:
        _chunk_service = build_default_service()
    return _chunk_service
