"""Chooses chunk size and chunk count for a file from its size."""

from common.constants import (
    CHUNK_SIZE_TIERS,
    LARGEST_TIER_CHUNK_SIZE,
    MIN_CHUNK_COUNT,
    SMALL_FILE_MIN_CHUNK_SIZE,
    SMALL_FILE_THRESHOLD,
)
from common.exceptions import InvalidInputError
from common.types import ChunkPlan


def is_small_file(file_size: int) -> bool:
    """Small files are always halved into exactly two chunks."""
    return file_size < SMALL_FILE_THRESHOLD


def nominal_chunk_size(file_size: int) -> int:
    """
    Nominal chunk size for a file size.

    Small files scale with their size; larger files use the first tier
    whose upper bound exceeds the file size.
    """
    if is_small_file(file_size):
        return max(SMALL_FILE_MIN_CHUNK_SIZE, file_size // 2)

    for upper_bound, chunk_size in CHUNK_SIZE_TIERS:
        if file_size < upper_bound:
            return chunk_size
    return LARGEST_TIER_CHUNK_SIZE


def plan_chunks(file_size: int) -> ChunkPlan:
    """
    Compute the chunk layout for a file.

    Args:
        file_size: Total byte length, must be positive

    Returns:
        ChunkPlan with the nominal chunk size and a chunk count of at least 2

    Raises:
        InvalidInputError: If file_size is not a positive integer
    """
    if isinstance(file_size, bool) or not isinstance(file_size, int) or file_size <= 0:
        raise InvalidInputError(f"File size must be a positive integer, got {file_size!r}")

    chunk_size = nominal_chunk_size(file_size)

    if is_small_file(file_size):
        chunk_count = MIN_CHUNK_COUNT
    else:
        chunk_count = max(MIN_CHUNK_COUNT, -(-file_size // chunk_size))

    return ChunkPlan(chunk_size=chunk_size, chunk_count=chunk_count)
