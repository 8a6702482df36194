"""Command parser for CLI input."""

import shlex

from cli.models import (
    ChunkCommand,
    CommandRequest,
    DeleteCommand,
    InfoCommand,
    ListCommand,
    ReconstructCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of Chunk/List/Info/Reconstruct/Delete)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]

    if command_name == "chunk":
        return _parse_chunk(tokens[1:])
    elif command_name == "list":
        return _parse_list(tokens[1:])
    elif command_name == "info":
        return InfoCommand(file_id=_single_file_id("info", tokens[1:]))
    elif command_name == "reconstruct":
        return _parse_reconstruct(tokens[1:])
    elif command_name == "delete":
        return DeleteCommand(file_id=_single_file_id("delete", tokens[1:]))
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_chunk(args: list[str]) -> ChunkCommand:
    """Parse 'chunk <path> [<path> ...]' command."""
    if not args:
        raise ParseError("chunk requires at least one file path")

    return ChunkCommand(file_list=tuple(args))


def _parse_list(args: list[str]) -> ListCommand:
    if args:
        raise ParseError("list takes no arguments")
    return ListCommand()


def _single_file_id(command_name: str, args: list[str]) -> str:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: <file_id>")
    return args[0]


def _parse_reconstruct(args: list[str]) -> ReconstructCommand:
    """Parse 'reconstruct <file_id> <output_path>' command."""
    if len(args) != 2:
        raise ParseError("reconstruct requires exactly 2 arguments: <file_id> <output_path>")

    file_id, output_path = args
    return ReconstructCommand(file_id=file_id, output_path=output_path)
