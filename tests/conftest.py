import logging

import pytest
import pytz

from config.settings import Settings


@pytest.fixture(autouse=True)
def server_tz(monkeypatch):
    """Run every test with UTC as local time unless a test overrides it."""
    monkeypatch.setattr(Settings, "SERVER_TZ", pytz.UTC)
    return pytz.UTC


@pytest.fixture
def rome(monkeypatch):
    tz = pytz.timezone("Europe/Rome")
    monkeypatch.setattr(Settings, "SERVER_TZ", tz)
    return tz


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class RecordingDownloader:
    def __init__(self):
        self.calls = []

    def trigger(self, url, file_name):
        self.calls.append((url, file_name))


@pytest.fixture
def recorder():
    return RecordingDownloader()
