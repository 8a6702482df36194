"""Cuts a file stream into planned chunks and scatters them over storage providers."""

import random
from typing import BinaryIO, Iterator, Optional

from common.checksum import compute_checksum
from common.exceptions import InvalidInputError
from common.logging_config import get_logger
from common.types import ChunkPlan, ChunkRecord, chunk_id_for
from chunkservice.planner import is_small_file
from storage.registry import ProviderRegistry

logger = get_logger(__name__)


def chunk_length(sequence_number: int, file_size: int, plan: ChunkPlan, remaining: int) -> int:
    """
    Number of bytes the chunk at sequence_number takes.

    Small files give chunk 0 exactly half (rounded down) and the last chunk
    everything left. Otherwise every chunk takes the nominal size except the
    last, which absorbs all remaining bytes.
    """
    is_last = sequence_number == plan.chunk_count - 1

    if is_small_file(file_size):
        if sequence_number == 0 and not is_last:
            return file_size // 2
        return remaining

    if is_last:
        return remaining
    return min(plan.chunk_size, remaining)


def read_with_retry(stream: BinaryIO, length: int) -> bytes:
    """
    Read up to length bytes, retrying once for a short read.

    Buffered and pipe-backed sources may return fewer bytes than requested
    before EOF; a second read picks up the shortfall.
    """
    if length <= 0:
        return b""

    data = stream.read(length)
    if data and len(data) < length:
        data += stream.read(length - len(data))
    return data or b""


class ChunkSplitter:
    """
    Streams a file sequentially into ChunkRecords, storing each chunk on a
    randomly chosen provider.
    """

    def __init__(self, registry: ProviderRegistry, rng: Optional[random.Random] = None):
        self.registry = registry
        self.rng = rng if rng is not None else random.Random()

    def split(
        self,
        stream: BinaryIO,
        file_id: str,
        file_size: int,
        plan: ChunkPlan,
    ) -> Iterator[ChunkRecord]:
        """
        Yield one stored ChunkRecord per planned chunk, in sequence order.

        Stops early without raising if the stream runs dry while bytes are
        still expected; callers compare the yielded count against the plan.
        Any provider or I/O error propagates and aborts the split.

        Args:
            stream: Binary stream positioned at the start of the file
            file_id: Owning file identifier
            file_size: Total bytes expected from the stream
            plan: Layout from the planner

        Raises:
            InvalidInputError: If file_size or the plan is not usable
        """
        if file_size <= 0:
            raise InvalidInputError("file_size must be greater than 0")
        if plan.chunk_size <= 0 or plan.chunk_count <= 0:
            raise InvalidInputError(f"Invalid chunk plan: {plan}")

        remaining = file_size

        for sequence_number in range(plan.chunk_count):
            expected = chunk_length(sequence_number, file_size, plan, remaining)
            data = read_with_retry(stream, expected)

            if not data and expected > 0:
                logger.warning(
                    f"Source ended early for file {file_id}: chunk {sequence_number} expected "
                    f"{expected} bytes, {remaining} bytes unread"
                )
                return

            provider = self.registry.choose(self.rng)
            chunk_id = chunk_id_for(file_id, sequence_number)
            checksum = compute_checksum(data)
            location = provider.store(chunk_id, data)

            logger.debug(f"Stored chunk data to {provider.name}: {location}")

            record = ChunkRecord.create(
                file_id=file_id,
                sequence_number=sequence_number,
                size=len(data),
                storage_provider=provider.name,
                storage_location=location,
                checksum=checksum,
            )

            remaining -= len(data)

            logger.debug(
                f"Created chunk {sequence_number + 1}/{plan.chunk_count} for file {file_id}, "
                f"size: {len(data)}, provider: {provider.name}"
            )
            yield record
