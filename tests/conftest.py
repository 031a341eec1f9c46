import pytest

from poelink_obs import bootstrap


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Start every test without an installed config or env overrides."""
    monkeypatch.delenv(bootstrap.ENV_LEVEL, raising=False)
    monkeypatch.delenv(bootstrap.ENV_MODE, raising=False)
    bootstrap.shutdown()
    yield
    bootstrap.shutdown()


class RecordingChannel:
    """Output channel that keeps every call for inspection."""

    def __init__(self):
        self.calls = []

    def debug(self, *args):
        self.calls.append(("debug", args))

    def info(self, *args):
        self.calls.append(("info", args))

    def warn(self, *args):
        self.calls.append(("warn", args))

    def error(self, *args):
        self.calls.append(("error", args))


@pytest.fixture
def channel():
    return RecordingChannel()
