"""Pytest configuration and fixtures."""

import io
import logging

import pytest

from plumbline.config import RunnerConfig
from plumbline.metrics import Recorder
from plumbline.runner import Runner


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up plumbline loggers after each test to prevent handler leaks."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("plumbline")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def sink():
    return io.StringIO()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def runner(sink, recorder):
    """Runner writing uncolored output to an in-memory sink."""
    return Runner(sink=sink, config=RunnerConfig(color=False), listeners=[recorder])
