"""Tests for the chunk splitter."""

import io
import random

import pytest

from common.checksum import compute_checksum
from common.constants import KIB, MIB
from common.exceptions import InvalidInputError, ProviderUnavailableError
from common.types import ChunkPlan
from chunkservice.planner import plan_chunks
from chunkservice.splitter import ChunkSplitter, chunk_length, read_with_retry
from storage.registry import ProviderRegistry


class ShortReadStream(io.BytesIO):
    """Returns half of the first requested read, then behaves normally."""

    def __init__(self, data):
        super().__init__(data)
        self._shortened = False

    def read(self, size=-1):
        if self._shortened or size is None or size < 0:
            return super().read(size)
        self._shortened = True
        return super().read(max(1, size // 2))


def _split(registry, data, file_id="file1"):
    plan = plan_chunks(len(data))
    splitter = ChunkSplitter(registry, random.Random(7))
    return plan, list(splitter.split(io.BytesIO(data), file_id, len(data), plan))


def _sizes(file_size):
    plan = plan_chunks(file_size)
    remaining = file_size
    sizes = []
    for seq in range(plan.chunk_count):
        length = chunk_length(seq, file_size, plan, remaining)
        sizes.append(length)
        remaining -= length
    return sizes


class TestChunkLength:
    def test_small_file_halves(self):
        assert _sizes(10) == [5, 5]
        assert _sizes(11) == [5, 6]
        assert _sizes(64 * KIB - 1) == [32 * KIB - 1, 32 * KIB]

    def test_one_byte_file(self):
        assert _sizes(1) == [0, 1]

    def test_forced_second_chunk_can_be_empty(self):
        assert _sizes(64 * KIB) == [64 * KIB, 0]
        assert _sizes(100 * KIB) == [100 * KIB, 0]

    def test_tiered_file_last_chunk_takes_remainder(self):
        assert _sizes(3 * MIB) == [512 * KIB] * 6
        assert _sizes(3 * MIB + 1) == [512 * KIB] * 6 + [1]
        assert _sizes(200 * KIB) == [128 * KIB, 72 * KIB]

    def test_sizes_always_sum_to_file_size(self):
        for size in (1, 2, 999, 64 * KIB, 300 * KIB, 1 * MIB + 17):
            assert sum(_sizes(size)) == size


class TestReadWithRetry:
    def test_recovers_from_one_short_read(self):
        stream = ShortReadStream(b"abcdefgh")

        assert read_with_retry(stream, 8) == b"abcdefgh"

    def test_returns_short_data_at_eof(self):
        assert read_with_retry(io.BytesIO(b"abc"), 10) == b"abc"

    def test_zero_length(self):
        assert read_with_retry(io.BytesIO(b"abc"), 0) == b""


class TestChunkSplitter:
    def test_split_small_file(self, registry):
        data = b"0123456789"
        plan, chunks = _split(registry, data)

        assert [c.sequence_number for c in chunks] == [0, 1]
        assert [c.size for c in chunks] == [5, 5]
        assert [c.chunk_id for c in chunks] == ["file1_chunk_0", "file1_chunk_1"]
        assert chunks[0].checksum == compute_checksum(b"01234")
        assert chunks[1].checksum == compute_checksum(b"56789")

    def test_chunks_are_stored_on_recorded_provider(self, registry):
        data = bytes(range(256)) * 1200
        plan, chunks = _split(registry, data)

        assert len(chunks) == plan.chunk_count
        rebuilt = b"".join(
            registry.get(c.storage_provider).retrieve(c.chunk_id) for c in chunks
        )
        assert rebuilt == data

    def test_split_stores_empty_boundary_chunk(self, registry):
        data = b"z" * (64 * KIB)
        _, chunks = _split(registry, data)

        assert [c.size for c in chunks] == [64 * KIB, 0]
        last = chunks[-1]
        assert registry.get(last.storage_provider).retrieve(last.chunk_id) == b""
        assert last.checksum == compute_checksum(b"")

    def test_truncated_source_stops_early(self, registry):
        declared = 3 * MIB
        plan = plan_chunks(declared)
        splitter = ChunkSplitter(registry, random.Random(1))

        chunks = list(splitter.split(io.BytesIO(b"a" * (1 * MIB)), "f", declared, plan))

        assert len(chunks) == 2
        assert len(chunks) < plan.chunk_count

    def test_uses_both_providers(self, registry):
        data = b"q" * (64 * KIB)
        plan = ChunkPlan(chunk_size=1 * KIB, chunk_count=64)
        splitter = ChunkSplitter(registry, random.Random(3))

        chunks = list(splitter.split(io.BytesIO(data), "f", len(data), plan))

        assert len(chunks) == 64

        assert {c.storage_provider for c in chunks} == {"FileSystem", "Database"}

    def test_empty_registry(self):
        splitter = ChunkSplitter(ProviderRegistry(), random.Random(0))

        with pytest.raises(ProviderUnavailableError):
            list(splitter.split(io.BytesIO(b"abcd"), "f", 4, plan_chunks(4)))

    def test_rejects_bad_input(self, registry):
        splitter = ChunkSplitter(registry)

        with pytest.raises(InvalidInputError):
            list(splitter.split(io.BytesIO(b""), "f", 0, ChunkPlan(1024, 2)))
        with pytest.raises(InvalidInputError):
            list(splitter.split(io.BytesIO(b"ab"), "f", 2, ChunkPlan(0, 2)))
