import logging

import pytest

from task_api.logging_setup import setup_logging


@pytest.fixture()
def root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_setup_logging_twice_keeps_single_handler(root_logger):
    setup_logging("DEBUG")
    setup_logging("WARNING")

    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], logging.StreamHandler)
    assert root_logger.level == logging.WARNING
