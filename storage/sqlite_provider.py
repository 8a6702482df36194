"""Stores chunk bytes as BLOB rows in a dedicated SQLite database."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, Union

from common.constants import DATABASE_PROVIDER_NAME
from common.exceptions import ChunkNotFoundError
from common.logging_config import get_logger
from storage.base import StorageProvider

logger = get_logger(__name__)


class SQLiteStorageProvider(StorageProvider):
    """
    Keeps chunks in a chunk_blobs table, one row per chunk id.
    """

    def __init__(self, database_path: Union[str, Path], name: str = DATABASE_PROVIDER_NAME):
        self._name = name
        self.database_path = Path(database_path).resolve()
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()
        logger.info(f"{type(self).__name__} '{name}' initialized [database_path={self.database_path}]")

    @property
    def name(self) -> str:
        return self._name

    @contextmanager
    def _connection(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS chunk_blobs (
                    chunk_id TEXT PRIMARY KEY,
                    data BLOB NOT NULL,
                    size INTEGER NOT NULL,
                    stored_at TEXT NOT NULL
                )
            """)
            conn.commit()

    def location_for(self, chunk_id: str) -> str:
        return f"sqlite://{self.database_path}#{chunk_id}"

    def store(self, chunk_id: str, data: bytes) -> str:
        self._validate_chunk_id(chunk_id)
        with self._connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO chunk_blobs (chunk_id, data, size, stored_at)
                VALUES (?, ?, ?, ?)
                """,
                (chunk_id, sqlite3.Binary(data), len(data), datetime.now(timezone.utc).isoformat())
            )
            conn.commit()
        logger.debug(f"Stored chunk {chunk_id} to database storage, size: {len(data)} bytes")
        return self.location_for(chunk_id)

    def retrieve(self, chunk_id: str) -> bytes:
        self._validate_chunk_id(chunk_id)
        with self._connection() as conn:
            row = conn.execute(
                "SELECT data FROM chunk_blobs WHERE chunk_id = ?",
                (chunk_id,)
            ).fetchone()

        if row is None:
            raise ChunkNotFoundError(f"Database chunk not found: {chunk_id}")

        data = bytes(row["data"])
        logger.debug(f"Retrieved chunk {chunk_id} from database storage, size: {len(data)} bytes")
        return data

    def delete(self, chunk_id: str) -> bool:
        self._validate_chunk_id(chunk_id)
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM chunk_blobs WHERE chunk_id = ?", (chunk_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.debug(f"Deleted chunk {chunk_id} from database storage")
        else:
            logger.warning(f"Database chunk not found for deletion: {chunk_id}")
        return deleted

    def exists(self, chunk_id: str) -> bool:
        self._validate_chunk_id(chunk_id)
        with self._connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM chunk_blobs WHERE chunk_id = ?",
                (chunk_id,)
            ).fetchone()
        return row is not None

    def storage_size(self) -> int:
        with self._connection() as conn:
            row = conn.execute("SELECT COALESCE(SUM(size), 0) AS total FROM chunk_blobs").fetchone()
        return row["total"]

    def chunk_count(self) -> int:
        with self._connection() as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM chunk_blobs").fetchone()
        return row["total"]
