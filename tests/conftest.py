"""Pytest configuration and fixtures."""

import logging
from contextlib import contextmanager

import pytest

from fluentcheck import events
from fluentcheck.config import STORE
from fluentcheck.finalization import scope
from fluentcheck.rendering.base import Renderer
from fluentcheck.reporter import REPORTER

pytest_plugins = ["pytester"]


class RecordingRenderer(Renderer):
    def __init__(self):
        self.successes = []
        self.failures = []
        self.summaries = []

    def print_success(self, result):
        self.successes.append(result)

    def print_failure(self, result):
        self.failures.append(result)

    def print_session_summary(self, session):
        self.summaries.append(session)


@pytest.fixture(autouse=True)
def clean_engine_state(monkeypatch):
    """Give every test a fresh reporter, config store and handler registry."""
    monkeypatch.delenv("FLUENTCHECK_ENHANCED_OUTPUT", raising=False)
    REPORTER.reset()
    events.clear_handlers()
    STORE.reset()
    yield
    REPORTER.reset()
    events.clear_handlers()
    STORE.reset()


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up fluentcheck loggers after each test."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("fluentcheck"):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                handler.close()
            logger.handlers.clear()


@pytest.fixture
def recorder():
    """Install a renderer that keeps everything it is given."""
    renderer = RecordingRenderer()
    STORE.set_renderer(renderer)
    return renderer


@contextmanager
def _detached():
    with scope() as opened:
        yield opened
        opened.discard()


@pytest.fixture
def detached():
    """Build chains that are inspected but never finalized."""
    return _detached
