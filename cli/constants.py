"""CLI constants and configuration."""

from pathlib import Path

from prompt_toolkit.styles import Style

COMMANDS = ["chunk", "list", "info", "reconstruct", "delete", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#2E9E6B bold",
        "command": "#0088ff bold",
    }
)

GREEN = "\033[32m"
TEAL = "\033[38;2;46;158;107m"
RESET = "\033[0m"

LOGO = f"""{TEAL}
  +-+-+-+-+-+ +-+-+-+-+-+
  |C|H|U|N|K| |V|A|U|L|T|
  +-+-+-+-+-+ +-+-+-+-+-+
{RESET}"""

WELCOME_TITLE = "ChunkVault CLI - Chunked File Storage"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "chunkvault> "

DEFAULT_CONFIG_PATH = Path.home() / ".chunkvault" / "config.json"

HELP_TEXT = """Available commands:
  chunk <path> [<path> ...]              Split files into chunks and store them
  list                                   List chunked files, newest first
  info <file_id>                         Show a file's metadata and chunk layout
  reconstruct <file_id> <output_path>    Rebuild a file and verify its checksum
  delete <file_id>                       Delete a file and all of its chunks
  clear                                  Clear screen and redisplay welcome message
  help                                   Show this help
  exit                                   Exit REPL

Paths are resolved to absolute paths before they are sent; the service
reads sources and writes outputs on its own host.
Examples:
  chunk report.pdf photos/cat.png
  list
  info 3f2a9c0e1b7d4e5f8a6b2c1d0e9f8a7b
  reconstruct 3f2a9c0e1b7d4e5f8a6b2c1d0e9f8a7b restored/report.pdf
  delete 3f2a9c0e1b7d4e5f8a6b2c1d0e9f8a7b"""
