"""Pytest configuration for the pofile test suite."""

from __future__ import annotations

import logging

import pytest

from pofile.log import logger


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests of a single module")
    config.addinivalue_line(
        "markers", "integration: CLI runs and checks against third-party tooling"
    )


@pytest.fixture(autouse=True)
def reset_logger():
    """Give every test an unconfigured ``pofile`` logger."""
    prev_handlers = list(logger.handlers)
    prev_level = logger.level
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    try:
        yield
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.handlers.extend(prev_handlers)
        logger.setLevel(prev_level)
