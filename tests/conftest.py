"""Pytest configuration and shared fixtures."""
import logging
import sys

import pytest
import structlog

from typed_events import EventBusChannel


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "logging: test reconfigures global logging")


class Recorder:
    """Handler that records every payload it receives."""

    def __init__(self, name="handler", log=None):
        self.name = name
        self.calls = []
        self._log = log

    def __call__(self, payload):
        self.calls.append(payload)
        if self._log is not None:
            self._log.append((self.name, payload))


class ErrorSpy:
    """``on_error`` hook that records ``(error, key, payload)`` triples."""

    def __init__(self):
        self.calls = []

    def __call__(self, error, key, payload):
        self.calls.append((error, key, payload))


@pytest.fixture
def recorder():
    """Factory for recording handlers; pass a shared list to capture call order."""
    return Recorder


@pytest.fixture
def error_spy():
    return ErrorSpy()


@pytest.fixture
def bus(error_spy):
    """Channel whose handler errors land in ``error_spy``."""
    return EventBusChannel({"on_error": error_spy})


@pytest.fixture
def restore_logging():
    """Undo global stdlib/structlog configuration made by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
            stream = getattr(handler, "stream", None)
            if stream is not None and stream not in (sys.stderr, sys.stdout):
                stream.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
