import logging

import pytest

from price_compare.logger_config import configure_logging, get_logger


def test_get_logger_attaches_a_single_handler() -> None:
    logger = get_logger("price_search.test_single")
    again = get_logger("price_search.test_single")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_level_names_are_accepted() -> None:
    logger = get_logger("price_search.test_level", "debug")

    assert logger.level == logging.DEBUG


def test_unknown_level_name() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        get_logger("price_search.test_unknown", "LOUD")


def test_configure_logging_targets_pipeline_tree() -> None:
    logger = configure_logging("WARNING")

    assert logger.name == "price_search"
    assert logger.level == logging.WARNING
