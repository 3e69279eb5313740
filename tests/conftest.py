"""Shared fixtures for recorder tests."""

import pytest

from testrecorder.config import RecorderOptions
from testrecorder.events import Event, EventKind
from testrecorder.model import Instant, Test, TestID
from testrecorder.reporters.recorder import Recorder


def at(seconds: float) -> Instant:
    return Instant.from_seconds(seconds)


def make_test(*path: str, **kwargs) -> Test:
    """Build a test whose id is ``path`` and whose name is the last component."""
    return Test(id=TestID(path[0], tuple(path[1:])), name=kwargs.pop("name", path[-1]), **kwargs)


def event(kind: EventKind, seconds: float = 0.0, **kwargs) -> Event:
    return Event(kind=kind, instant=at(seconds), **kwargs)


@pytest.fixture
def plain_options():
    return RecorderOptions(platform="linux")


@pytest.fixture
def ansi_options():
    return RecorderOptions(use_ansi_escape_codes=True, platform="linux")


@pytest.fixture
def written():
    return []


@pytest.fixture
def recorder(plain_options, written):
    return Recorder(plain_options, written.append)

