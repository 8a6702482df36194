"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ChunkCommand:
    """Chunk one or more files."""

    file_list: tuple[str, ...]
    command: Literal["chunk"] = "chunk"


@dataclass(frozen=True)
class ListCommand:
    """List every chunked file."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class InfoCommand:
    """Show metadata for one file."""

    file_id: str
    command: Literal["info"] = "info"


@dataclass(frozen=True)
class ReconstructCommand:
    """Rebuild a file to an output path."""

    file_id: str
    output_path: str
    command: Literal["reconstruct"] = "reconstruct"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete a file and its chunks."""

    file_id: str
    command: Literal["delete"] = "delete"


CommandRequest = (
    ChunkCommand
    | ListCommand
    | InfoCommand
    | ReconstructCommand
    | DeleteCommand
)
