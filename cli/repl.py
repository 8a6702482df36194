"""Interactive prompt_toolkit session for the chunk service."""

import os
import sys
from typing import Callable, Dict

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from cli.commands import (
    handle_chunk,
    handle_delete,
    handle_info,
    handle_list,
    handle_reconstruct,
)
from cli.constants import (
    COMMANDS,
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    ChunkCommand,
    DeleteCommand,
    InfoCommand,
    ListCommand,
    ReconstructCommand,
)
from cli.parser import ParseError, parse_command

HANDLERS: Dict[type, Callable[..., str]] = {
    ChunkCommand: handle_chunk,
    ListCommand: handle_list,
    InfoCommand: handle_info,
    ReconstructCommand: handle_reconstruct,
    DeleteCommand: handle_delete,
}


class ExitRepl(Exception):
    """Raised by the 'exit' built-in to leave the loop."""


def clear_screen() -> None:
    os.system("cls" if sys.platform == "win32" else "clear")


def show_welcome() -> None:
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj) -> str:
    """Run the handler registered for a parsed command."""
    handler = HANDLERS.get(type(cmd_obj))
    if handler is None:
        return f"Unknown command type: {type(cmd_obj)}"
    return handler(cmd_obj)


def run_builtin(line: str) -> bool:
    """
    Execute help/clear/exit.

    Returns:
        True if line was a built-in and has been handled

    Raises:
        ExitRepl: For 'exit'
    """
    if line == "exit":
        raise ExitRepl()
    if line == "help":
        print(HELP_TEXT)
        return True
    if line == "clear":
        clear_screen()
        show_welcome()
        return True
    return False


def repl_loop() -> None:
    """Prompt for commands until 'exit' or end of input."""
    session: PromptSession = PromptSession(
        completer=WordCompleter(COMMANDS, ignore_case=True),
        history=InMemoryHistory(),
        style=STYLE,
    )

    clear_screen()
    show_welcome()

    while True:
        try:
            line = session.prompt([("class:prompt", PROMPT_TEXT)]).strip()
            if not line or run_builtin(line):
                continue
            print(dispatch_command(parse_command(line)))
        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except (EOFError, ExitRepl):
            print("Goodbye!")
            break
