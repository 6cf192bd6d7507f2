"""Pytest configuration and fixtures."""

import inspect
import logging

import pytest

from softly import SoftAssertions


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up softly loggers after each test so handlers never leak between tests."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("softly")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def softly():
    """Fresh soft assertions session."""
    return SoftAssertions()


@pytest.fixture
def next_line():
    """Return the line number following the caller's current line."""

    def _next_line() -> int:
        return inspect.currentframe().f_back.f_lineno + 1

    return _next_line
