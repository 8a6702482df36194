"""Tests for logging setup."""

import logging

import pytest

from common.logging_config import get_logger, setup_logging


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    for handler in list(root.handlers):
        if getattr(handler, '_chunkvault_handler', False):
            root.removeHandler(handler)
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def _own_handlers(root):
    return [h for h in root.handlers if getattr(h, '_chunkvault_handler', False)]


def test_setup_logging_installs_single_handler(clean_root_logger):
    setup_logging('chunkservice', log_level='DEBUG')
    setup_logging('cli', log_level='WARNING')

    handlers = _own_handlers(clean_root_logger)
    assert len(handlers) == 1
    assert handlers[0].level == logging.WARNING


def test_setup_logging_uses_env_level(clean_root_logger, monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'ERROR')

    logger = setup_logging('chunkservice')

    assert logger.level == logging.ERROR


def test_unknown_level_falls_back_to_info(clean_root_logger):
    logger = setup_logging('chunkservice', log_level='chatty')

    assert logger.level == logging.INFO


def test_correlation_id_in_format(clean_root_logger):
    setup_logging('chunkservice', correlation_id='req-42')

    formatter = _own_handlers(clean_root_logger)[0].formatter
    record = logging.LogRecord('x', logging.INFO, __file__, 1, 'hello', None, None)
    assert '[req-42] - hello' in formatter.format(record)


def test_get_logger_returns_named_logger():
    assert get_logger('storage.registry').name == 'storage.registry'
