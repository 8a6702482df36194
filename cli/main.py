"""Entry point for the chunkvault REPL."""

import os
import sys
from pathlib import Path
from typing import List, Optional

from common.logging_config import setup_logging
from cli import commands
from cli.client import ChunkServiceClient
from cli.config import Config
from cli.repl import repl_loop

USAGE = "usage: chunkvault [--debug] [--config PATH]"


def _option_value(args: List[str], flag: str) -> Optional[str]:
    if flag not in args:
        return None
    index = args.index(flag)
    if index + 1 >= len(args):
        raise SystemExit(f"{flag} requires a value\n{USAGE}")
    return args[index + 1]


def main(argv: Optional[List[str]] = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    debug = '--debug' in args
    config_path = _option_value(args, '--config')

    logger = setup_logging('cli', log_level='DEBUG' if debug else os.getenv('LOG_LEVEL', 'INFO'))
    if debug:
        logger.info("Debug logging enabled")

    if config_path:
        logger.info(f"Using config file {config_path}")
        commands.set_client(ChunkServiceClient(Config(Path(config_path).expanduser())))

    logger.info("CLI starting...")
    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")


if __name__ == "__main__":
    main()
