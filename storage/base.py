"""Storage provider interface consumed by the chunking engine."""

from abc import ABC, abstractmethod

from common.exceptions import InvalidInputError


class StorageProvider(ABC):
    """
    A backend able to store, retrieve and delete chunk bytes by chunk id.

    Implementations are stateless from the engine's point of view: the engine
    only remembers the provider name and the location returned by store().
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name recorded on every chunk this provider holds."""

    @abstractmethod
    def store(self, chunk_id: str, data: bytes) -> str:
        """
        Persist chunk bytes.

        Args:
            chunk_id: Chunk identifier
            data: Raw chunk bytes (may be empty for boundary chunks)

        Returns:
            Backend-specific location of the stored bytes
        """

    @abstractmethod
    def retrieve(self, chunk_id: str) -> bytes:
        """
        Read chunk bytes.

        Raises:
            ChunkNotFoundError: If the chunk is not stored here
        """

    @abstractmethod
    def delete(self, chunk_id: str) -> bool:
        """
        Remove chunk bytes.

        Returns:
            True if the chunk was deleted, False if it did not exist
        """

    @abstractmethod
    def exists(self, chunk_id: str) -> bool:
        """Check whether the chunk is stored here."""

    @abstractmethod
    def storage_size(self) -> int:
        """Total bytes held by this provider."""

    @abstractmethod
    def chunk_count(self) -> int:
        """Number of chunks held by this provider."""

    @staticmethod
    def _validate_chunk_id(chunk_id: str) -> None:
        if not chunk_id or not chunk_id.strip():
            raise InvalidInputError("chunk_id cannot be empty")
        if "/" in chunk_id or "\\" in chunk_id or chunk_id in (".", ".."):
            raise InvalidInputError(f"Invalid chunk_id: {chunk_id!r}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
