"""Provides SHA-256 checksum calculation and verification helpers."""

import hashlib
from pathlib import Path
from typing import BinaryIO, Union

from common.constants import CHECKSUM_READ_SIZE


def compute_checksum(data: bytes) -> str:
    """
    Compute SHA-256 checksum for given data.

    Args:
        data: Bytes to compute checksum for

    Returns:
        Lowercase hexadecimal string representation of SHA-256 hash
    """
    return hashlib.sha256(data).hexdigest()


def verify_checksum(data: bytes, expected: str) -> bool:
    """
    Verify that data matches expected checksum.

    Args:
        data: Bytes to verify
        expected: Expected SHA-256 checksum (hex string)

    Returns:
        True if checksum matches, False otherwise
    """
    return compute_checksum(data) == expected.lower()


def compute_stream_checksum(stream: BinaryIO, read_size: int = CHECKSUM_READ_SIZE) -> str:
    """
    Compute SHA-256 checksum of a binary stream from its current position to EOF.

    Args:
        stream: Readable binary stream
        read_size: Number of bytes consumed per read

    Returns:
        Lowercase hexadecimal SHA-256 digest
    """
    calculator = IncrementalChecksumCalculator()
    while True:
        piece = stream.read(read_size)
        if not piece:
            break
        calculator.update(piece)
    return calculator.finalize()


def compute_file_checksum(path: Union[str, Path], read_size: int = CHECKSUM_READ_SIZE) -> str:
    """
    Compute SHA-256 checksum of a file on disk without loading it whole.

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(path, "rb") as f:
        return compute_stream_checksum(f, read_size)


class IncrementalChecksumCalculator:
    """
    Calculate SHA-256 checksum incrementally for streaming data.

    Usage:
        calculator = IncrementalChecksumCalculator()
        calculator.update(piece1)
        calculator.update(piece2)
        final_checksum = calculator.finalize()
    """

    def __init__(self):
        self._hasher = hashlib.sha256()
        self._finalized = False

    def update(self, data: bytes) -> None:
        if self._finalized:
            raise ValueError("Cannot update after finalization")
        self._hasher.update(data)

    def finalize(self) -> str:
        self._finalized = True
        return self._hasher.hexdigest()

    def reset(self) -> None:
        """Reset calculator to initial state."""
        self._hasher = hashlib.sha256()
        self._finalized = False
