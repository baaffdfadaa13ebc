# test_log.py
# SPDX-License-Identifier: MIT
import io
import logging

import pytest

from listlicenses.core.log import PACKAGE_LOGGER_NAME, configure_logging, get_logger


def test_configure_logging_sets_logger_level():
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(logging.WARNING)

    configure_logging(level="DEBUG")

    assert logger.level == logging.DEBUG
    logger.setLevel(logging.WARNING)


def test_configure_logging_adds_a_single_stream_handler():
    name = "listlicenses.test.handlers"
    stream = io.StringIO()
    logger = configure_logging(level="INFO", stream=stream, logger_name=name)
    configure_logging(level="INFO", stream=stream, logger_name=name)

    assert sum(isinstance(h, logging.StreamHandler) for h in logger.handlers) == 1
    get_logger(name).info("matched %d packages", 3)
    assert stream.getvalue() == "INFO listlicenses.test.handlers: matched 3 packages\n"


def test_unknown_level_name_is_rejected():
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging(level="LOUD", logger_name="listlicenses.test.levels")


def test_level_names_are_case_insensitive():
    logger = configure_logging(level=" info ", stream=io.StringIO(), logger_name="listlicenses.test.case")
    assert logger.level == logging.INFO


def test_get_logger_defaults_to_package_logger():
    assert get_logger().name == PACKAGE_LOGGER_NAME
