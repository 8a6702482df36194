import logging
import os
import sys
from typing import Optional

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _build_formatter(correlation_id: Optional[str] = None) -> logging.Formatter:
    if correlation_id:
        return logging.Formatter(
            f'%(asctime)s - %(name)s - %(levelname)s - [{correlation_id}] - %(message)s',
            datefmt=DATE_FORMAT
        )
    return logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt=DATE_FORMAT
    )


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Module loggers created with get_logger(__name__) propagate to the root
    logger, so the handler is installed there as well as on the component
    logger.

    Args:
        component_name: Name of the component (e.g., 'chunkservice', 'cli')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO
        correlation_id: Optional correlation ID to include in log format

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')

    level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    if not any(getattr(h, '_chunkvault_handler', False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler._chunkvault_handler = True
        handler.setFormatter(_build_formatter(correlation_id))
        root.addHandler(handler)

    for handler in root.handlers:
        if getattr(handler, '_chunkvault_handler', False):
            handler.setLevel(level)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)

