"""Custom exception classes for the chunking engine and its collaborators."""


class ChunkServiceException(Exception):
    """
    Base exception class for all chunk service errors.
    """
    code = "INTERNAL_ERROR"


class NotFoundError(ChunkServiceException):
    """
    Raised when a source file, file record or chunk does not exist.
    """
    code = "NOT_FOUND"


class SourceFileNotFoundError(NotFoundError):
    """
    Raised when the file to be chunked does not exist on disk.
    """
    pass


class FileRecordNotFoundError(NotFoundError):
    """
    Raised when no file record exists for a file id.
    """
    pass


class ChunkNotFoundError(NotFoundError):
    """
    Raised when a storage provider holds no bytes for a chunk id.
    """
    pass


class InvalidInputError(ChunkServiceException):
    """
    Raised for non-positive sizes, empty identifiers and malformed arguments.
    """
    code = "INVALID_INPUT"


class ProviderUnavailableError(ChunkServiceException):
    """
    Raised when a chunk names a storage provider that is not registered.
    """
    code = "PROVIDER_UNAVAILABLE"


class IntegrityFailureError(ChunkServiceException):
    """
    Raised when a chunk or whole-file checksum does not match the recorded one.
    """
    code = "INTEGRITY_FAILURE"


class PartialDataError(ChunkServiceException):
    """
    Raised when the stored chunk count differs from the planned chunk count.
    """
    code = "PARTIAL_DATA"
