"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from qvsim.logging import configure_logging, get_logger, set_log_level


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    configure_logging(level=logging.WARNING)


def test_get_logger_returns_prefixed_logger():
    """get_logger places loggers under the qvsim namespace."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "qvsim.test_module"


def test_module_names_are_not_double_prefixed():
    assert get_logger("qvsim.backend.kernels").name == "qvsim.backend.kernels"
    assert get_logger().name == "qvsim"


def test_get_logger_caching():
    assert get_logger("test_module") is get_logger("test_module")


def test_different_modules_get_different_loggers():
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2


def test_default_level_is_warning():
    logger = get_logger("fresh_module_for_level_check")
    assert logger.level == logging.WARNING


def test_set_log_level_string():
    logger = get_logger("test_module")
    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG
    set_log_level("ERROR")
    assert logger.level == logging.ERROR


def test_configure_logging_stream_and_format():
    logger = get_logger("test_module")
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    logger.debug("Debug message")
    assert "[DEBUG] qvsim.test_module: Debug message" in stream.getvalue()


def test_configure_logging_custom_format():
    logger = get_logger("test_module")
    stream = StringIO()
    configure_logging(level="INFO", format_string="%(message)s!", stream=stream)
    logger.info("hello")
    assert stream.getvalue().strip() == "hello!"


def test_logger_does_not_propagate():
    assert get_logger("test_module").propagate is False


def test_run_logs_summary_at_info():
    """A finished run reports its size at INFO."""
    from qvsim.simulator import Simulator

    stream = StringIO()
    configure_logging(level=logging.INFO, stream=stream)
    Simulator(2, seed=0).run([{"type": "H", "wire": 0}], shots=8)
    assert "run finished: 2 qubits, 1 ops" in stream.getvalue()
