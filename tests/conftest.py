import pytest

from water_tracker.engine import TrackingEngine
from water_tracker.presenter import ChannelUnavailable


class RecordingChannel:
    name = "recording"

    def __init__(self):
        self.shown = []
        self.cleared = 0

    def show(self, record):
        self.shown.append(record)

    def clear(self):
        self.cleared += 1


class DeniedChannel:
    """Simulates a status surface whose permission was denied."""
    name = "denied"

    def show(self, record):
        raise ChannelUnavailable("permission denied")

    def clear(self):
        raise ChannelUnavailable("permission denied")


@pytest.fixture
def make_engine():
    """Factory for engines that never tick on their own unless asked to."""
    engines = []

    def _make(interval=3600, **kwargs):
        engine = TrackingEngine(interval=interval, **kwargs)
        engines.append(engine)
        return engine

    yield _make
    for engine in engines:
        engine.close()


@pytest.fixture
def engine(make_engine):
    return make_engine()


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def denied_channel():
    return DeniedChannel()
