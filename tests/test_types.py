"""Tests for FileRecord and ChunkRecord helpers."""

import pytest

from common.exceptions import InvalidInputError
from common.types import (
    ChunkRecord,
    FileRecord,
    ReconstructionResult,
    ReconstructionState,
    chunk_id_for,
)


def _file(size=10, total_chunks=2):
    return FileRecord.create(
        name="a.txt",
        original_path="/tmp/a.txt",
        size=size,
        checksum="ab" * 32,
        chunk_size=1024,
        total_chunks=total_chunks,
    )


def _chunk(file_id, seq, size):
    return ChunkRecord.create(
        file_id=file_id,
        sequence_number=seq,
        size=size,
        storage_provider="FileSystem",
        storage_location=f"/chunks/{seq}",
        checksum="cd" * 32,
    )


def test_chunk_id_format():
    assert chunk_id_for("abc", 0) == "abc_chunk_0"
    assert chunk_id_for("abc", 12) == "abc_chunk_12"


def test_file_record_create_generates_unique_ids():
    assert _file().file_id != _file().file_id


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"original_path": "  "},
        {"checksum": ""},
        {"size": 0},
        {"chunk_size": 0},
        {"total_chunks": 0},
    ],
)
def test_file_record_create_validates(overrides):
    kwargs = dict(
        name="a.txt",
        original_path="/tmp/a.txt",
        size=10,
        checksum="ab" * 32,
        chunk_size=1024,
        total_chunks=2,
    )
    kwargs.update(overrides)

    with pytest.raises(InvalidInputError):
        FileRecord.create(**kwargs)


def test_chunk_record_allows_empty_boundary_chunk():
    chunk = _chunk("f1", 1, 0)

    assert chunk.size == 0
    assert chunk.chunk_id == "f1_chunk_1"


@pytest.mark.parametrize(
    "overrides",
    [
        {"file_id": ""},
        {"sequence_number": -1},
        {"size": -1},
        {"storage_provider": ""},
        {"storage_location": ""},
    ],
)
def test_chunk_record_create_validates(overrides):
    kwargs = dict(
        file_id="f1",
        sequence_number=0,
        size=5,
        storage_provider="FileSystem",
        storage_location="/x",
        checksum="cd" * 32,
    )
    kwargs.update(overrides)

    with pytest.raises(InvalidInputError):
        ChunkRecord.create(**kwargs)


def test_add_chunk_rejects_foreign_chunk():
    file = _file()

    with pytest.raises(InvalidInputError):
        file.add_chunk(_chunk("someone-else", 0, 5))


def test_completeness_and_integrity():
    file = _file(size=10, total_chunks=2)
    file.add_chunk(_chunk(file.file_id, 0, 5))

    assert not file.is_complete()
    assert not file.validate_integrity()

    file.add_chunk(_chunk(file.file_id, 1, 5))

    assert file.is_complete()
    assert file.total_chunk_size() == 10
    assert file.validate_integrity()


def test_integrity_fails_on_size_mismatch():
    file = _file(size=10, total_chunks=2)
    file.add_chunk(_chunk(file.file_id, 0, 5))
    file.add_chunk(_chunk(file.file_id, 1, 4))

    assert file.is_complete()
    assert not file.validate_integrity()


def test_touch_sets_last_accessed():
    file = _file()
    assert file.last_accessed_at is None

    file.touch()

    assert file.last_accessed_at is not None
    assert file.last_accessed_at >= file.created_at


def test_reconstruction_result_success_flag():
    assert ReconstructionResult(ReconstructionState.SUCCESS, 10).success
    assert not ReconstructionResult(ReconstructionState.CORRUPTION_DETECTED).success
