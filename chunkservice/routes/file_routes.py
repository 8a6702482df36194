"""File operation API routes."""

import time

from fastapi import APIRouter, Depends, Request, status

from common.exceptions import FileRecordNotFoundError
from chunkservice.schemas.common import ErrorResponse
from chunkservice.schemas.files import (
    ChunkFileRequest,
    ChunkFileResponse,
    DeleteFileResponse,
    FileInfoResponse,
    ListFilesResponse,
    ReconstructFileRequest,
    ReconstructFileResponse,
)
from chunkservice.service_locator import get_chunk_service
from chunkservice.services.chunk_service import ChunkService

router = APIRouter(prefix="/files", tags=["Files"])


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


@router.post(
    "",
    response_model=ChunkFileResponse,
    status_code=status.HTTP_201_CREATED,
    responses={code: {"model": ErrorResponse} for code in (400, 404, 409, 503)},
)
def chunk_file(
    body: ChunkFileRequest,
    request: Request,
    service: ChunkService = Depends(get_chunk_service),
):
    """
    Chunk a file that is readable by the service host.

    Parameters:
        - source_path: Path of the file on the service host

    Returns:
        - file_id, file_name, size, checksum, chunk_size, total_chunks

    Raises:
        - 400: Empty path or empty file
        - 404: Source file not found
        - 409: Source ended before all planned chunks were read
        - 503: No storage provider available
    """
    start = time.perf_counter()
    result = service.chunk_file(body.source_path)

    if not result.success:
        raise result.error

    file = result.file
    return ChunkFileResponse(
        request_id=_request_id(request),
        success=True,
        message=f"File chunked into {file.total_chunks} chunks",
        file_id=file.file_id,
        file_name=file.name,
        size=file.size,
        checksum=file.checksum,
        chunk_size=file.chunk_size,
        total_chunks=file.total_chunks,
        processing_time_ms=_elapsed_ms(start),
    )


@router.get("", response_model=ListFilesResponse)
def list_files(request: Request, service: ChunkService = Depends(get_chunk_service)):
    """
    List every chunked file, newest first.
    """
    files = service.list_files()
    return ListFilesResponse(
        request_id=_request_id(request),
        files=[FileInfoResponse.from_record(f, include_chunks=False) for f in files],
        total_count=len(files),
        total_size=sum(f.size for f in files),
    )


@router.get("/{file_id}", response_model=FileInfoResponse, responses={404: {"model": ErrorResponse}})
def get_file_info(file_id: str, service: ChunkService = Depends(get_chunk_service)):
    """
    Get a file's metadata and its chunks in sequence order.

    Raises:
        - 404: File not found
    """
    file = service.get_file_info(file_id)
    if file is None:
        raise FileRecordNotFoundError(f"File {file_id} not found")
    return FileInfoResponse.from_record(file)


@router.post("/{file_id}/reconstruct", response_model=ReconstructFileResponse)
def reconstruct_file(
    file_id: str,
    body: ReconstructFileRequest,
    request: Request,
    service: ChunkService = Depends(get_chunk_service),
):
    """
    Rebuild a file to a path on the service host.

    Always answers 200 with success=false when reconstruction fails; the
    state field names the terminal state (not_found, partial_data,
    corruption_detected, failed).
    """
    start = time.perf_counter()
    result = service.reconstruct(file_id, body.output_path)

    return ReconstructFileResponse(
        request_id=_request_id(request),
        success=result.success,
        message=result.message,
        file_id=file_id,
        output_path=body.output_path,
        state=result.state.value,
        bytes_written=result.bytes_written,
        processing_time_ms=_elapsed_ms(start),
    )


@router.delete("/{file_id}", response_model=DeleteFileResponse, responses={404: {"model": ErrorResponse}})
def delete_file(file_id: str, request: Request, service: ChunkService = Depends(get_chunk_service)):
    """
    Delete a file, its chunk records and the stored chunk bytes.

    Raises:
        - 404: File not found
    """
    if service.get_file_info(file_id) is None:
        raise FileRecordNotFoundError(f"File {file_id} not found")

    deleted = service.delete_file(file_id)
    return DeleteFileResponse(
        request_id=_request_id(request),
        success=deleted,
        message="File deleted" if deleted else "File could not be deleted",
        file_id=file_id,
    )
