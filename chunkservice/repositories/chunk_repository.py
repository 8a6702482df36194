"""Chunk repository for database operations."""

import sqlite3
from datetime import datetime
from typing import List, Optional

from common.logging_config import get_logger
from common.types import ChunkRecord
from chunkservice.database import get_db_connection, open_connection

logger = get_logger(__name__)

_CHUNK_COLUMNS = """
    chunk_id, file_id, sequence_number, size, storage_provider,
    storage_location, checksum, created_at
"""


def _row_to_chunk(row: sqlite3.Row) -> ChunkRecord:
    return ChunkRecord(
        chunk_id=row["chunk_id"],
        file_id=row["file_id"],
        sequence_number=row["sequence_number"],
        size=row["size"],
        storage_provider=row["storage_provider"],
        storage_location=row["storage_location"],
        checksum=row["checksum"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class ChunkRepository:
    @staticmethod
    def create_chunks(chunks: List[ChunkRecord], conn: Optional[sqlite3.Connection] = None) -> None:
        if not chunks:
            return

        logger.debug(f"Creating {len(chunks)} chunks for file_id={chunks[0].file_id}")
        should_close = conn is None
        if conn is None:
            conn = open_connection()

        try:
            cursor = conn.cursor()
            for chunk in chunks:
                cursor.execute(
                    """
                    INSERT INTO chunks (chunk_id, file_id, sequence_number, size, storage_provider,
                                        storage_location, checksum, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        chunk.chunk_id,
                        chunk.file_id,
                        chunk.sequence_number,
                        chunk.size,
                        chunk.storage_provider,
                        chunk.storage_location,
                        chunk.checksum,
                        chunk.created_at.isoformat(),
                    )
                )
            if should_close:
                conn.commit()
            logger.debug(f"Created {len(chunks)} chunks successfully")
        except Exception as e:
            logger.error(f"Failed to create chunks: {e}", exc_info=True)
            raise
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def get_chunks_by_file(file_id: str) -> List[ChunkRecord]:
        """
        Load a file's chunks in insertion order.

        Callers that need sequence order must sort by sequence_number themselves.
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_CHUNK_COLUMNS} FROM chunks WHERE file_id = ? ORDER BY seq",
                (file_id,)
            )
            return [_row_to_chunk(row) for row in cursor.fetchall()]

    @staticmethod
    def delete_chunks(file_id: str, conn: Optional[sqlite3.Connection] = None) -> List[str]:
        logger.debug(f"Deleting chunks [file_id={file_id}]")
        should_close = conn is None
        if conn is None:
            conn = open_connection()

        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT chunk_id FROM chunks WHERE file_id = ? ORDER BY seq",
                (file_id,)
            )
            chunk_ids = [row["chunk_id"] for row in cursor.fetchall()]

            cursor.execute("DELETE FROM chunks WHERE file_id = ?", (file_id,))
            if should_close:
                conn.commit()

            logger.info(f"Deleted {len(chunk_ids)} chunks [file_id={file_id}]")
            return chunk_ids
        except Exception as e:
            logger.error(f"Failed to delete chunks [file_id={file_id}]: {e}", exc_info=True)
            raise
        finally:
            if should_close:
                conn.close()
