"""Tests for logging utilities."""

import logging
from io import StringIO

from dfopt.logging import configure_logging, get_logger, set_log_level


def test_get_logger_returns_namespaced_logger():
    """Test that get_logger returns a logger under the dfopt namespace."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "dfopt.test_module"


def test_get_logger_keeps_package_names():
    """Test that module names already under dfopt are not prefixed twice."""
    assert get_logger("dfopt.nelder_mead").name == "dfopt.nelder_mead"
    assert get_logger().name == "dfopt"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    assert get_logger("test_module") is get_logger("test_module")


def test_configure_logging_routes_output():
    """Test that configure_logging installs a handler on the given stream."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        get_logger("test_module").debug("Debug message")
        assert "Debug message" in stream.getvalue()
        assert "dfopt.test_module" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_optimizer_reports_at_info_level():
    """Test that a finished run is reported by the strategy logger."""
    from dfopt import LocalSearch, LocalSearchConfig
    from dfopt.functions import sphere

    stream = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=stream)
        LocalSearch(LocalSearchConfig(step=0.5)).optimize(sphere, arity=2)
        assert "Local search" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    assert get_logger("test_module").propagate is False
