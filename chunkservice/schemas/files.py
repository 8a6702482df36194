"""Pydantic schemas for file operation endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field

from common.types import ChunkRecord, FileRecord


class ChunkFileRequest(BaseModel):
    """Request model for chunking a file on the service host."""
    source_path: str = Field(..., min_length=1)


class ReconstructFileRequest(BaseModel):
    """Request model for rebuilding a file."""
    output_path: str = Field(..., min_length=1)


class ChunkInfoResponse(BaseModel):
    """Response model for one chunk of a file."""
    chunk_id: str
    sequence_number: int
    size: int
    storage_provider: str
    storage_location: str
    checksum: str
    created_at: str

    @classmethod
    def from_record(cls, chunk: ChunkRecord) -> "ChunkInfoResponse":
        return cls(
            chunk_id=chunk.chunk_id,
            sequence_number=chunk.sequence_number,
            size=chunk.size,
            storage_provider=chunk.storage_provider,
            storage_location=chunk.storage_location,
            checksum=chunk.checksum,
            created_at=chunk.created_at.isoformat(),
        )


class FileInfoResponse(BaseModel):
    """Response model for file metadata."""
    file_id: str
    name: str
    original_path: str
    size: int
    checksum: str
    chunk_size: int
    total_chunks: int
    created_at: str
    last_accessed_at: Optional[str] = None
    is_complete: bool
    integrity_valid: bool
    chunks: List[ChunkInfoResponse] = []

    @classmethod
    def from_record(cls, file: FileRecord, include_chunks: bool = True) -> "FileInfoResponse":
        return cls(
            file_id=file.file_id,
            name=file.name,
            original_path=file.original_path,
            size=file.size,
            checksum=file.checksum,
            chunk_size=file.chunk_size,
            total_chunks=file.total_chunks,
            created_at=file.created_at.isoformat(),
            last_accessed_at=file.last_accessed_at.isoformat() if file.last_accessed_at else None,
            is_complete=file.is_complete(),
            integrity_valid=file.validate_integrity(),
            chunks=[ChunkInfoResponse.from_record(c) for c in file.chunks] if include_chunks else [],
        )


class ChunkFileResponse(BaseModel):
    """Response model for file chunking."""
    request_id: str
    success: bool
    message: str
    file_id: str
    file_name: str
    size: int
    checksum: str
    chunk_size: int
    total_chunks: int
    processing_time_ms: int


class ReconstructFileResponse(BaseModel):
    """Response model for file reconstruction."""
    request_id: str
    success: bool
    message: str
    file_id: str
    output_path: str
    state: str
    bytes_written: int
    processing_time_ms: int


class ListFilesResponse(BaseModel):
    """Response model for file listing."""
    request_id: str
    files: List[FileInfoResponse]
    total_count: int
    total_size: int


class DeleteFileResponse(BaseModel):
    """Response model for file deletion."""
    request_id: str
    success: bool
    message: str
    file_id: str
