"""Tests for logging setup."""

import logging

import pytest

from ingresslab import logging_config


@pytest.fixture
def root_logger(monkeypatch):
    root = logging.getLogger()
    # setup_logging swaps handlers on this throwaway list
    monkeypatch.setattr(root, "handlers", [])
    level = root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.setLevel(level)


def test_debug_flag_sets_root_level(root_logger):
    logging_config.setup_logging(debug=True)
    assert root_logger.level == logging.DEBUG

    logging_config.setup_logging()
    assert root_logger.level == logging.INFO
    assert len(root_logger.handlers) == 1


def test_debug_state_lives_on_the_logger_only():
    assert not hasattr(logging_config, "DEBUG_MODE")


def test_log_file_handler(root_logger, tmp_path):
    log_file = tmp_path / "logs" / "lab.log"

    logging_config.setup_logging(log_file=str(log_file))
    logging.getLogger("ingresslab.test").info("hello")

    assert len(root_logger.handlers) == 2
    for handler in root_logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text()
