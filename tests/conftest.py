"""Shared fixtures for FileSorter tests."""

from datetime import datetime

import pytest

from filesorter.logger import setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Give every test the default logger and restore it afterwards."""
    setup_logging()
    yield
    setup_logging()


@pytest.fixture
def dirs(tmp_path):
    """Create an unsorted drop folder and a sorted destination root."""
    unsorted = tmp_path / "unsorted"
    sorted_root = tmp_path / "dest"
    unsorted.mkdir()
    sorted_root.mkdir()
    return unsorted, sorted_root


@pytest.fixture
def created():
    return datetime(2024, 3, 15, 10, 30)


class FakeClock:
    """Monotonic clock that only advances when sleep() is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()
