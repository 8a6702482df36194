"""Tests for the storage provider registry."""

import random
from collections import Counter

import pytest

from common.exceptions import InvalidInputError, ProviderUnavailableError
from storage.filesystem_provider import FileSystemStorageProvider
from storage.registry import ProviderRegistry


def test_register_and_get(fs_provider, db_provider):
    registry = ProviderRegistry()
    registry.register(fs_provider)
    registry.register(db_provider)

    assert registry.get("FileSystem") is fs_provider
    assert registry.get("Database") is db_provider
    assert registry.names() == ["FileSystem", "Database"]
    assert len(registry) == 2
    assert "Database" in registry


def test_duplicate_name_rejected(fs_provider, tmp_path):
    registry = ProviderRegistry([fs_provider])

    with pytest.raises(InvalidInputError):
        registry.register(FileSystemStorageProvider(tmp_path / "other"))


def test_get_unknown(registry):
    with pytest.raises(ProviderUnavailableError):
        registry.get("Tape")


def test_choose_from_empty_registry():
    with pytest.raises(ProviderUnavailableError):
        ProviderRegistry().choose(random.Random(0))


def test_choose_is_roughly_uniform(registry):
    rng = random.Random(42)
    counts = Counter(registry.choose(rng).name for _ in range(2000))

    assert set(counts) == {"FileSystem", "Database"}
    assert 800 < counts["FileSystem"] < 1200


def test_choose_is_repeatable_with_same_seed(registry):
    first_rng = random.Random(5)
    second_rng = random.Random(5)

    first = [registry.choose(first_rng).name for _ in range(20)]
    second = [registry.choose(second_rng).name for _ in range(20)]

    assert first == second
