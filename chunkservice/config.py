"""Configuration settings for the chunk service."""

import os
from typing import Optional

from common.constants import (
    DEFAULT_BLOB_DATABASE_PATH,
    DEFAULT_CHUNK_STORAGE_PATH,
    DEFAULT_METADATA_DATABASE_PATH,
)


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return int(value)


DATABASE_PATH = os.environ.get("CHUNK_DATABASE_PATH", DEFAULT_METADATA_DATABASE_PATH)

CHUNK_STORAGE_PATH = os.environ.get("CHUNK_STORAGE_PATH", DEFAULT_CHUNK_STORAGE_PATH)

BLOB_DATABASE_PATH = os.environ.get("CHUNK_BLOB_DATABASE_PATH", DEFAULT_BLOB_DATABASE_PATH)

SERVICE_HOST = os.environ.get("CHUNK_SERVICE_HOST", "0.0.0.0")

SERVICE_PORT = int(os.environ.get("CHUNK_SERVICE_PORT", "8000"))

VERIFY_CHUNK_CHECKSUMS = _env_flag("CHUNK_VERIFY_CHUNK_CHECKSUMS", True)

RANDOM_SEED = _env_optional_int("CHUNK_RANDOM_SEED")
