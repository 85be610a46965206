"""
Status presenter: projects engine snapshots onto persistent status surfaces.
Rendering is best-effort; a failing channel is logged and skipped.
"""
import logging
import threading
from typing import NamedTuple

from . import config

logger = logging.getLogger("WaterTracker")


class ChannelUnavailable(Exception):
    """The presentation channel is missing, disconnected or denied."""


class StatusRecord(NamedTuple):
    title: str
    text: str
    level_text: str
    level: float
    running: bool
    ongoing: bool = True
    silent: bool = True
    priority: str = config.STATUS_PRIORITY
    channel_id: str = config.STATUS_CHANNEL_ID
    notification_id: int = config.STATUS_NOTIFICATION_ID

    def as_dict(self):
        return self._asdict()


def format_level(level):
    return f"{level:.1f} ml"


def build_record(snapshot):
    level_text = format_level(snapshot.level)
    return StatusRecord(
        title=config.STATUS_TITLE,
        text=f"Water Level: {level_text}",
        level_text=level_text,
        level=round(snapshot.level, 1),
        running=snapshot.running,
    )


class StatusPresenter:
    def __init__(self, channels=None):
        self.channels = list(channels or [])
        self.last_record = None
        self._lock = threading.Lock()

    def attach(self, engine):
        engine.add_listener(self.render, self.withdraw)
        return self

    def add_channel(self, channel):
        self.channels.append(channel)

    def render(self, snapshot):
        """Push the snapshot to every channel. Returns True if any accepted it."""
        record = build_record(snapshot)
        with self._lock:
            self.last_record = record
            return self._each_channel("show", record)

    def withdraw(self):
        with self._lock:
            self.last_record = None
            return self._each_channel("clear")

    def _each_channel(self, method, *args):
        delivered = False
        for channel in self.channels:
            name = getattr(channel, "name", type(channel).__name__)
            try:
                getattr(channel, method)(*args)
                delivered = True
            except ChannelUnavailable as e:
                logger.warning(f"Status channel {name} unavailable: {e}")
            except Exception as e:
                logger.warning("Status channel %s failed: %s", name, e)
        return delivered
