"""Command handler functions for CLI operations."""

from typing import Optional

from common.logging_config import get_logger
from cli.client import ChunkServiceClient
from cli.config import Config
from cli.constants import DEFAULT_CONFIG_PATH
from cli.models import (
    ChunkCommand,
    DeleteCommand,
    InfoCommand,
    ListCommand,
    ReconstructCommand,
)

logger = get_logger(__name__)


_client: Optional[ChunkServiceClient] = None


def get_client() -> ChunkServiceClient:
    """
    Get or create global ChunkServiceClient instance.

    Returns:
        ChunkServiceClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new ChunkServiceClient instance")
        _client = ChunkServiceClient(Config(DEFAULT_CONFIG_PATH))
    return _client


def set_client(client: Optional[ChunkServiceClient]) -> None:
    """Replace the global client, e.g. one built from a non-default config file."""
    global _client
    _client = client


def handle_chunk(cmd: ChunkCommand, client: Optional[ChunkServiceClient] = None) -> str:
    """
    Handle 'chunk' command.

    Args:
        cmd: ChunkCommand with file_list
        client: Optional ChunkServiceClient for dependency injection (testing)

    Returns:
        One result per file
    """
    logger.info(f"Executing chunk command: files={list(cmd.file_list)}")
    if client is None:
        client = get_client()
    return client.chunk_files(list(cmd.file_list))


def handle_list(cmd: ListCommand, client: Optional[ChunkServiceClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_files()


def handle_info(cmd: InfoCommand, client: Optional[ChunkServiceClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.get_file_info(cmd.file_id)


def handle_reconstruct(cmd: ReconstructCommand, client: Optional[ChunkServiceClient] = None) -> str:
    """
    Handle 'reconstruct' command.

    Args:
        cmd: ReconstructCommand with file_id and output_path
        client: Optional ChunkServiceClient for dependency injection (testing)

    Returns:
        Success message or the failure state reported by the service
    """
    logger.info(f"Executing reconstruct command: file_id={cmd.file_id} output_path={cmd.output_path}")
    if client is None:
        client = get_client()
    result = client.reconstruct_file(cmd.file_id, cmd.output_path)
    logger.debug("Reconstruct command completed")
    return result


def handle_delete(cmd: DeleteCommand, client: Optional[ChunkServiceClient] = None) -> str:
    logger.info(f"Executing delete command: file_id={cmd.file_id}")
    if client is None:
        client = get_client()
    return client.delete_file(cmd.file_id)
