"""Shared data type definitions (FileRecord, ChunkRecord, ChunkPlan, results)."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from common.exceptions import ChunkServiceException, InvalidInputError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_file_id() -> str:
    """
    Generate a new opaque file identifier.

    Returns:
        32-character hex UUID4 string
    """
    return uuid.uuid4().hex


def chunk_id_for(file_id: str, sequence_number: int) -> str:
    """
    Derive the chunk identifier for a position in a file.

    Args:
        file_id: Owning file identifier
        sequence_number: Zero-based chunk position

    Returns:
        Chunk identifier of the form "<file_id>_chunk_<n>"
    """
    return f"{file_id}_chunk_{sequence_number}"


def _require_text(value: str, field_name: str) -> None:
    if not value or not str(value).strip():
        raise InvalidInputError(f"{field_name} cannot be empty")


@dataclass(frozen=True)
class ChunkPlan:
    """
    Layout chosen by the chunk planner for one file.
    """
    chunk_size: int
    chunk_count: int


@dataclass(frozen=True)
class ChunkRecord:
    """
    Metadata for a single stored chunk.
    """
    chunk_id: str
    file_id: str
    sequence_number: int
    size: int
    storage_provider: str
    storage_location: str
    checksum: str
    created_at: datetime

    @classmethod
    def create(
        cls,
        file_id: str,
        sequence_number: int,
        size: int,
        storage_provider: str,
        storage_location: str,
        checksum: str,
        created_at: Optional[datetime] = None,
    ) -> "ChunkRecord":
        """
        Build a validated chunk record whose id is derived from (file_id, sequence_number).

        Raises:
            InvalidInputError: If any identifier is empty or a number is out of range
        """
        _require_text(file_id, "file_id")
        _require_text(storage_provider, "storage_provider")
        _require_text(storage_location, "storage_location")
        _require_text(checksum, "checksum")
        if sequence_number < 0:
            raise InvalidInputError("sequence_number cannot be negative")
        if size < 0:
            raise InvalidInputError("chunk size cannot be negative")

        return cls(
            chunk_id=chunk_id_for(file_id, sequence_number),
            file_id=file_id,
            sequence_number=sequence_number,
            size=size,
            storage_provider=storage_provider,
            storage_location=storage_location,
            checksum=checksum,
            created_at=created_at or utcnow(),
        )


@dataclass
class FileRecord:
    """
    Complete metadata for a chunked file. Owns its chunk records in sequence order.
    """
    file_id: str
    name: str
    original_path: str
    size: int
    checksum: str
    chunk_size: int
    total_chunks: int
    created_at: datetime
    last_accessed_at: Optional[datetime] = None
    chunks: List[ChunkRecord] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        name: str,
        original_path: str,
        size: int,
        checksum: str,
        chunk_size: int,
        total_chunks: int,
        file_id: Optional[str] = None,
    ) -> "FileRecord":
        """
        Build a validated file record with a fresh identifier.

        Raises:
            InvalidInputError: If names are empty or sizes/counts are not positive
        """
        _require_text(name, "name")
        _require_text(original_path, "original_path")
        _require_text(checksum, "checksum")
        if size <= 0:
            raise InvalidInputError("file size must be greater than 0")
        if chunk_size <= 0:
            raise InvalidInputError("chunk_size must be greater than 0")
        if total_chunks <= 0:
            raise InvalidInputError("total_chunks must be greater than 0")

        return cls(
            file_id=file_id or generate_file_id(),
            name=name,
            original_path=original_path,
            size=size,
            checksum=checksum,
            chunk_size=chunk_size,
            total_chunks=total_chunks,
            created_at=utcnow(),
        )

    def add_chunk(self, chunk: ChunkRecord) -> None:
        if chunk.file_id != self.file_id:
            raise InvalidInputError(
                f"Chunk {chunk.chunk_id} does not belong to file {self.file_id}"
            )
        self.chunks.append(chunk)

    def touch(self) -> None:
        self.last_accessed_at = utcnow()

    def is_complete(self) -> bool:
        return len(self.chunks) == self.total_chunks

    def total_chunk_size(self) -> int:
        return sum(chunk.size for chunk in self.chunks)

    def validate_integrity(self) -> bool:
        """Complete and the chunk sizes add up to the file size."""
        return self.is_complete() and self.total_chunk_size() == self.size


@dataclass(frozen=True)
class ChunkFileResult:
    """
    Outcome of chunking one source file.
    """
    success: bool
    file: Optional[FileRecord] = None
    error: Optional[ChunkServiceException] = None

    @classmethod
    def ok(cls, file: FileRecord) -> "ChunkFileResult":
        return cls(success=True, file=file)

    @classmethod
    def failed(cls, error: ChunkServiceException) -> "ChunkFileResult":
        return cls(success=False, error=error)


class ReconstructionState(str, Enum):
    LOADING = "loading"
    STREAMING = "streaming"
    VERIFYING = "verifying"
    SUCCESS = "success"
    CORRUPTION_DETECTED = "corruption_detected"
    NOT_FOUND = "not_found"
    PARTIAL_DATA = "partial_data"
    FAILED = "failed"


@dataclass(frozen=True)
class ReconstructionResult:
    state: ReconstructionState
    bytes_written: int = 0
    message: str = ""

    @property
    def success(self) -> bool:
        return self.state == ReconstructionState.SUCCESS
