"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from chunkservice.config import DATABASE_PATH


def init_database() -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS files (
                file_id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                original_path TEXT NOT NULL,
                size INTEGER NOT NULL CHECK (size > 0),
                checksum TEXT NOT NULL,
                chunk_size INTEGER NOT NULL,
                total_chunks INTEGER NOT NULL,
                created_at TEXT NOT NULL,
                last_accessed_at TEXT
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS chunks (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                chunk_id TEXT UNIQUE NOT NULL,
                file_id TEXT NOT NULL,
                sequence_number INTEGER NOT NULL,
                size INTEGER NOT NULL,
                storage_provider TEXT NOT NULL,
                storage_location TEXT NOT NULL,
                checksum TEXT NOT NULL,
                created_at TEXT NOT NULL,
                UNIQUE(file_id, sequence_number),
                FOREIGN KEY(file_id) REFERENCES files(file_id) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_chunks_file_id ON chunks(file_id)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_chunks_provider ON chunks(storage_provider)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_files_created_at ON files(created_at)
        """)

        conn.commit()


def open_connection() -> sqlite3.Connection:
    """
    Open a connection the caller is responsible for closing.
    """
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_db_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = open_connection()
    try:
        yield conn
    finally:
        conn.close()
