"""Chunk service: the five engine operations exposed to request dispatchers."""

import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from common.checksum import compute_file_checksum
from common.exceptions import (
    ChunkServiceException,
    InvalidInputError,
    PartialDataError,
    ProviderUnavailableError,
    SourceFileNotFoundError,
)
from common.logging_config import get_logger
from common.types import (
    ChunkFileResult,
    ChunkRecord,
    FileRecord,
    ReconstructionResult,
    ReconstructionState,
    utcnow,
)
from chunkservice.database import get_db_connection
from chunkservice.planner import plan_chunks
from chunkservice.reassembler import FileReassembler
from chunkservice.repositories.chunk_repository import ChunkRepository
from chunkservice.repositories.file_repository import FileRepository
from chunkservice.splitter import ChunkSplitter
from storage.registry import ProviderRegistry

logger = get_logger(__name__)


class ChunkService:
    """
    Chunks files across storage providers and rebuilds them on demand.

    No public method raises for not-found, invalid input, provider,
    integrity or partial-data conditions; each returns a definitive
    result instead and logs the cause.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        rng: Optional[random.Random] = None,
        verify_chunk_checksums: bool = True,
        reassembler_options: Optional[Dict[str, Any]] = None,
    ):
        self.registry = registry
        self.rng = rng if rng is not None else random.Random()
        self.verify_chunk_checksums = verify_chunk_checksums
        self.reassembler_options = reassembler_options or {}
        self.file_repo = FileRepository()
        self.chunk_repo = ChunkRepository()
        self.splitter = ChunkSplitter(registry, self.rng)

    def chunk_file(self, source_path: Union[str, Path]) -> ChunkFileResult:
        """
        Split a file on disk into chunks, store them and persist the metadata.

        Args:
            source_path: Path of the file to chunk

        Returns:
            ChunkFileResult carrying the new FileRecord, or the error that stopped it
        """
        logger.info(f"Starting to chunk file: {source_path}")
        stored_chunks: List[ChunkRecord] = []

        try:
            source = self._resolve_source(source_path)
            file_size = source.stat().st_size
            if file_size <= 0:
                raise InvalidInputError(f"Cannot chunk an empty file: {source}")

            checksum = compute_file_checksum(source)
            plan = plan_chunks(file_size)
            file_record = FileRecord.create(
                name=source.name,
                original_path=str(source),
                size=file_size,
                checksum=checksum,
                chunk_size=plan.chunk_size,
                total_chunks=plan.chunk_count,
            )

            with open(source, "rb") as stream:
                for chunk in self.splitter.split(stream, file_record.file_id, file_size, plan):
                    stored_chunks.append(chunk)
                    file_record.add_chunk(chunk)

            if not file_record.is_complete():
                raise PartialDataError(
                    f"Split of {source} produced {len(file_record.chunks)} of "
                    f"{file_record.total_chunks} planned chunks"
                )
            if file_record.total_chunk_size() != file_record.size:
                raise PartialDataError(
                    f"Chunk sizes of {source} sum to {file_record.total_chunk_size()} "
                    f"bytes, expected {file_record.size}"
                )

            self._persist(file_record)
        except Exception as e:
            logger.error(f"Error chunking file: {source_path}: {e}", exc_info=not isinstance(e, ChunkServiceException))
            if stored_chunks:
                logger.info(f"Cleaning up {len(stored_chunks)} orphaned chunks")
                self._cleanup_chunks(stored_chunks)
            return ChunkFileResult.failed(self._as_service_error(e))

        logger.info(
            f"Successfully chunked file {file_record.name} into {file_record.total_chunks} chunks "
            f"[file_id={file_record.file_id}]"
        )
        return ChunkFileResult.ok(file_record)

    def reconstruct(self, file_id: str, output_path: Union[str, Path]) -> ReconstructionResult:
        """
        Rebuild a file into output_path, reporting the terminal reconstruction state.
        """
        logger.info(f"Starting to reconstruct file: {file_id} to {output_path}")

        if not file_id or not str(file_id).strip() or not output_path or not str(output_path).strip():
            logger.warning("Reconstruction requested with empty file_id or output_path")
            return ReconstructionResult(
                state=ReconstructionState.FAILED,
                message="file_id and output_path are required",
            )

        try:
            file_record = self.file_repo.get_by_id(file_id)
            chunks = self.chunk_repo.get_chunks_by_file(file_id) if file_record else []
        except Exception as e:
            logger.error(f"Error loading file {file_id} for reconstruction: {e}", exc_info=True)
            return ReconstructionResult(state=ReconstructionState.FAILED, message=str(e))

        if file_record is None:
            logger.warning(f"File not found: {file_id}")

        reassembler = FileReassembler(
            self.registry,
            verify_chunk_checksums=self.verify_chunk_checksums,
            **self.reassembler_options,
        )
        result = reassembler.reconstruct(file_record, chunks, output_path)

        if result.success:
            file_record.touch()
            try:
                self.file_repo.update_last_accessed(file_id, file_record.last_accessed_at)
            except Exception as e:
                logger.warning(f"Could not update last access time for {file_id}: {e}")

        return result

    def reconstruct_file(self, file_id: str, output_path: Union[str, Path]) -> bool:
        return self.reconstruct(file_id, output_path).success

    def get_file_info(self, file_id: str) -> Optional[FileRecord]:
        """
        Load a file record with its chunks in sequence order.

        Returns:
            FileRecord, or None if the id is unknown or the lookup failed
        """
        if not file_id or not str(file_id).strip():
            return None

        try:
            file_record = self.file_repo.get_by_id(file_id)
            if file_record is None:
                return None
            file_record.chunks = sorted(
                self.chunk_repo.get_chunks_by_file(file_id),
                key=lambda chunk: chunk.sequence_number,
            )
            return file_record
        except Exception as e:
            logger.error(f"Error getting file info: {file_id}: {e}", exc_info=True)
            return None

    def list_files(self) -> List[FileRecord]:
        try:
            files = self.file_repo.list_all()
            for file_record in files:
                file_record.chunks = sorted(
                    self.chunk_repo.get_chunks_by_file(file_record.file_id),
                    key=lambda chunk: chunk.sequence_number,
                )
            return files
        except Exception as e:
            logger.error(f"Error listing files: {e}", exc_info=True)
            return []

    def delete_file(self, file_id: str) -> bool:
        """
        Delete a file's stored chunk bytes, its chunk records, then the file record.

        Unknown providers and failed byte deletions are logged and skipped so
        the remaining chunks are still cleaned up.

        Returns:
            True only if the file record itself was removed
        """
        logger.info(f"Starting to delete file: {file_id}")

        if not file_id or not str(file_id).strip():
            return False

        try:
            file_record = self.file_repo.get_by_id(file_id)
            if file_record is None:
                logger.warning(f"File not found: {file_id}")
                return False

            chunks = self.chunk_repo.get_chunks_by_file(file_id)
            for chunk in chunks:
                self._delete_chunk_bytes(chunk)

            deleted = self._remove_metadata(file_id)
        except Exception as e:
            logger.error(f"Error deleting file: {file_id}: {e}", exc_info=True)
            return False

        if deleted:
            logger.info(f"Successfully deleted file: {file_id} ({len(chunks)} chunks)")
        return deleted

    def storage_stats(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": provider.name,
                "chunk_count": provider.chunk_count(),
                "storage_size": provider.storage_size(),
            }
            for provider in self.registry.providers()
        ]

    @staticmethod
    def _resolve_source(source_path: Union[str, Path]) -> Path:
        if source_path is None or not str(source_path).strip():
            raise InvalidInputError("source_path cannot be empty")
        source = Path(source_path).expanduser()
        if not source.is_file():
            raise SourceFileNotFoundError(f"File not found: {source_path}")
        return source.resolve()

    def _persist(self, file_record: FileRecord) -> None:
        with get_db_connection() as conn:
            try:
                self.file_repo.create_file(file_record, conn=conn)
                self.chunk_repo.create_chunks(file_record.chunks, conn=conn)
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    def _remove_metadata(self, file_id: str) -> bool:
        with get_db_connection() as conn:
            try:
                self.chunk_repo.delete_chunks(file_id, conn=conn)
                deleted = self.file_repo.delete_file(file_id, conn=conn)
                conn.commit()
            except Exception:
                conn.rollback()
                raise
        return deleted

    def _delete_chunk_bytes(self, chunk: ChunkRecord) -> None:
        try:
            provider = self.registry.get(chunk.storage_provider)
        except ProviderUnavailableError as e:
            logger.warning(f"Skipping byte deletion for chunk {chunk.chunk_id}: {e}")
            return

        try:
            provider.delete(chunk.chunk_id)
        except Exception as e:
            logger.warning(f"Failed to delete chunk {chunk.chunk_id} from {provider.name}: {e}")

    def _cleanup_chunks(self, chunks: List[ChunkRecord]) -> List[str]:
        """
        Delete stored chunk bytes after a failed split.

        Returns:
            Chunk ids that could not be deleted
        """
        failed = []
        for chunk in chunks:
            try:
                self.registry.get(chunk.storage_provider).delete(chunk.chunk_id)
                logger.debug(f"Deleted orphaned chunk {chunk.chunk_id}")
            except Exception as e:
                logger.error(f"Failed to delete orphaned chunk {chunk.chunk_id}: {e}")
                failed.append(chunk.chunk_id)
        return failed

    @staticmethod
    def _as_service_error(exc: Exception) -> ChunkServiceException:
        if isinstance(exc, ChunkServiceException):
            return exc
        error = ChunkServiceException(f"{type(exc).__name__}: {exc}")
        error.__cause__ = exc
        return error
