import logging as std_logging

import pytest

import graph_grouper.logging as logging


def test_loggers_are_configured_once():
    logger = logging.get_logger("graph_grouper.tests.once")
    again = logging.get_logger("graph_grouper.tests.once")

    assert logger is again
    assert len(logger.handlers) == 1
    assert not logger.propagate


def test_set_level_reaches_existing_and_new_loggers():
    existing = logging.get_logger("graph_grouper.tests.existing")
    original = existing.level
    try:
        logging.set_level(std_logging.DEBUG)
        assert existing.level == std_logging.DEBUG
        assert logging.get_logger("graph_grouper.tests.created_later").level == std_logging.DEBUG
    finally:
        logging.set_level(original)


def test_timer_returns_the_wrapped_result():
    @logging.timer(name="addition")
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
    assert add.__name__ == "add"


def test_timed_execution_logs_start_and_completion(caplog):
    logger = std_logging.getLogger("timing_check")
    with caplog.at_level(std_logging.INFO, logger="timing_check"):
        with logging.timed_execution("grouping", logger):
            pass

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "[cyan]Starting[/] grouping"
    assert messages[1].startswith("[green]Completed[/] grouping")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("debug", std_logging.DEBUG),
        ("WARNING", std_logging.WARNING),
        (None, std_logging.INFO),
        ("verbose", std_logging.INFO),
        ("root", std_logging.INFO),
        ("basic_format", std_logging.INFO),
    ],
)
def test_level_from_env(value, expected):
    assert logging._level_from_env(value) == expected
