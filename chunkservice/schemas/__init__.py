"""Pydantic schemas for API requests and responses."""

from chunkservice.schemas.files import (
    ChunkFileRequest,
    ChunkFileResponse,
    ChunkInfoResponse,
    DeleteFileResponse,
    FileInfoResponse,
    ListFilesResponse,
    ReconstructFileRequest,
    ReconstructFileResponse,
)
from chunkservice.schemas.common import ErrorResponse, ProviderStatus, ReadyResponse

__all__ = [
    "ChunkFileRequest",
    "ChunkFileResponse",
    "ChunkInfoResponse",
    "DeleteFileResponse",
    "FileInfoResponse",
    "ListFilesResponse",
    "ReconstructFileRequest",
    "ReconstructFileResponse",
    "ErrorResponse",
    "ProviderStatus",
    "ReadyResponse",
]
