"""File repository for database operations."""

import sqlite3
from datetime import datetime
from typing import List, Optional

from common.logging_config import get_logger
from common.types import FileRecord
from chunkservice.database import get_db_connection, open_connection

logger = get_logger(__name__)

_FILE_COLUMNS = """
    file_id, name, original_path, size, checksum, chunk_size,
    total_chunks, created_at, last_accessed_at
"""


def _row_to_file(row: sqlite3.Row) -> FileRecord:
    last_accessed = row["last_accessed_at"]
    return FileRecord(
        file_id=row["file_id"],
        name=row["name"],
        original_path=row["original_path"],
        size=row["size"],
        checksum=row["checksum"],
        chunk_size=row["chunk_size"],
        total_chunks=row["total_chunks"],
        created_at=datetime.fromisoformat(row["created_at"]),
        last_accessed_at=datetime.fromisoformat(last_accessed) if last_accessed else None,
    )


class FileRepository:
    @staticmethod
    def create_file(file: FileRecord, conn: Optional[sqlite3.Connection] = None) -> FileRecord:
        should_close = conn is None
        if conn is None:
            conn = open_connection()

        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO files (file_id, name, original_path, size, checksum, chunk_size,
                                   total_chunks, created_at, last_accessed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    file.file_id,
                    file.name,
                    file.original_path,
                    file.size,
                    file.checksum,
                    file.chunk_size,
                    file.total_chunks,
                    file.created_at.isoformat(),
                    file.last_accessed_at.isoformat() if file.last_accessed_at else None,
                )
            )
            if should_close:
                conn.commit()
            return file
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def get_by_id(file_id: str) -> Optional[FileRecord]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_FILE_COLUMNS} FROM files WHERE file_id = ?",
                (file_id,)
            )
            row = cursor.fetchone()

            if row is None:
                return None

            return _row_to_file(row)

    @staticmethod
    def list_all() -> List[FileRecord]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_FILE_COLUMNS} FROM files ORDER BY created_at DESC, rowid DESC")
            return [_row_to_file(row) for row in cursor.fetchall()]

    @staticmethod
    def update_last_accessed(file_id: str, accessed_at: datetime) -> bool:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE files SET last_accessed_at = ? WHERE file_id = ?",
                (accessed_at.isoformat(), file_id)
            )
            conn.commit()
            return cursor.rowcount > 0

    @staticmethod
    def delete_file(file_id: str, conn: Optional[sqlite3.Connection] = None) -> bool:
        """
        Remove a file row.

        Returns:
            True if a row was removed
        """
        logger.debug(f"Deleting file [file_id={file_id}]")
        should_close = conn is None
        if conn is None:
            conn = open_connection()

        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM files WHERE file_id = ?", (file_id,))
            if should_close:
                conn.commit()
            return cursor.rowcount > 0
        except Exception as e:
            logger.error(f"Failed to delete file [file_id={file_id}]: {e}", exc_info=True)
            raise
        finally:
            if should_close:
                conn.close()
