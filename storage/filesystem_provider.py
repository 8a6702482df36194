"""Stores chunk bytes as individual files in a directory."""

from pathlib import Path
from typing import List, Union

from common.constants import FILESYSTEM_PROVIDER_NAME
from common.exceptions import ChunkNotFoundError
from common.logging_config import get_logger
from storage.base import StorageProvider

logger = get_logger(__name__)

CHUNK_SUFFIX = ".chunk"


class FileSystemStorageProvider(StorageProvider):
    """
    Keeps every chunk in its own <chunk_id>.chunk file under base_directory.
    """

    def __init__(self, base_directory: Union[str, Path], name: str = FILESYSTEM_PROVIDER_NAME):
        self._name = name
        self.base_directory = Path(base_directory).resolve()
        self.base_directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"{type(self).__name__} '{name}' initialized [base_directory={self.base_directory}]")

    @property
    def name(self) -> str:
        return self._name

    def get_chunk_path(self, chunk_id: str) -> Path:
        """
        Get file path for a chunk.

        Args:
            chunk_id: Chunk identifier

        Returns:
            Path object for chunk file
        """
        self._validate_chunk_id(chunk_id)
        return self.base_directory / f"{chunk_id}{CHUNK_SUFFIX}"

    def store(self, chunk_id: str, data: bytes) -> str:
        filepath = self.get_chunk_path(chunk_id)
        self.base_directory.mkdir(parents=True, exist_ok=True)
        filepath.write_bytes(data)
        logger.debug(f"Stored chunk {chunk_id} to {filepath}, size: {len(data)} bytes")
        return str(filepath)

    def retrieve(self, chunk_id: str) -> bytes:
        filepath = self.get_chunk_path(chunk_id)
        try:
            data = filepath.read_bytes()
        except FileNotFoundError:
            raise ChunkNotFoundError(f"Chunk file not found: {filepath}") from None
        logger.debug(f"Retrieved chunk {chunk_id} from {filepath}, size: {len(data)} bytes")
        return data

    def delete(self, chunk_id: str) -> bool:
        filepath = self.get_chunk_path(chunk_id)
        if filepath.exists():
            filepath.unlink()
            logger.debug(f"Deleted chunk {chunk_id} from {filepath}")
            return True
        logger.warning(f"Chunk file not found for deletion: {filepath}")
        return False

    def exists(self, chunk_id: str) -> bool:
        return self.get_chunk_path(chunk_id).exists()

    def list_chunk_ids(self) -> List[str]:
        if not self.base_directory.exists():
            return []
        return sorted(path.stem for path in self.base_directory.glob(f"*{CHUNK_SUFFIX}"))

    def storage_size(self) -> int:
        if not self.base_directory.exists():
            return 0
        return sum(path.stat().st_size for path in self.base_directory.glob(f"*{CHUNK_SUFFIX}"))

    def chunk_count(self) -> int:
        return len(self.list_chunk_ids())
