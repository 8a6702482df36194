"""Utility functions for CLI output."""

import os


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based), e.g. "1.50 MiB" or "512 B".
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def short_id(file_id: str) -> str:
    return f"{file_id[:8]}..." if len(file_id) > 8 else file_id


def resolve_path(path: str) -> str:
    """Expand ~ and make a path absolute against the current directory."""
    return os.path.abspath(os.path.expanduser(path))
