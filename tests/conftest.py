"""Shared pytest fixtures for all tests."""

import os
import random
from pathlib import Path

import pytest

from cli.config import Config
from chunkservice.database import init_database
from chunkservice.services.chunk_service import ChunkService
from storage.filesystem_provider import FileSystemStorageProvider
from storage.registry import ProviderRegistry
from storage.sqlite_provider import SQLiteStorageProvider


@pytest.fixture
def test_db(tmp_path, monkeypatch):
    """
    Point the metadata store at a fresh database for each test.

    Returns:
        Path to the temporary metadata database
    """
    db_path = tmp_path / "metadata.db"
    monkeypatch.setattr("chunkservice.database.DATABASE_PATH", str(db_path))
    monkeypatch.setattr("chunkservice.config.DATABASE_PATH", str(db_path))
    init_database()
    return db_path


@pytest.fixture
def fs_provider(tmp_path):
    return FileSystemStorageProvider(tmp_path / "chunks")


@pytest.fixture
def db_provider(tmp_path):
    return SQLiteStorageProvider(tmp_path / "blobs" / "chunks.db")


@pytest.fixture
def registry(fs_provider, db_provider):
    return ProviderRegistry([fs_provider, db_provider])


@pytest.fixture
def rng():
    """Seeded random source so provider placement is repeatable within a test."""
    return random.Random(1234)


@pytest.fixture
def service(test_db, registry, rng):
    """
    ChunkService over both providers with verification delays disabled.
    """
    return ChunkService(
        registry,
        rng=rng,
        reassembler_options={"settle_delay": 0, "retry_backoff": 0},
    )


@pytest.fixture
def make_file(tmp_path):
    """
    Factory writing a source file of the given size with non-repeating content.

    Returns:
        Callable (size, name) -> Path
    """
    source_dir = tmp_path / "sources"
    source_dir.mkdir()

    def _make(size: int, name: str = "source.bin") -> Path:
        path = source_dir / name
        path.write_bytes(os.urandom(size))
        return path

    return _make


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Returns:
        Path to temporary .chunkvault directory
    """
    config_dir = tmp_path / '.chunkvault'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')
