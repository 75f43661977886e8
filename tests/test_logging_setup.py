# tests/test_logging_setup.py
import logging

import pytest

from logging_setup import setup_logging


@pytest.fixture()
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_repeated_setup_leaves_one_handler(root_logger):
    setup_logging("DEBUG")
    setup_logging("DEBUG")
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("chatty")
    assert root_logger.level == logging.INFO
    assert logging.getLogger("sqlalchemy").level == logging.WARNING
