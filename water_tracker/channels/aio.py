"""Adafruit IO feed: posts the level to a dashboard feed when it changes."""
import logging
import threading

import requests

from .. import config
from ..presenter import ChannelUnavailable

logger = logging.getLogger("WaterTracker")


class AioFeedChannel:
    name = "aio"

    def __init__(self, key=None, feed_url=None, session=None, background=True):
        self.key = config.AIO_KEY if key is None else key
        self.feed_url = feed_url or config.AIO_FEED_URL
        self.session = session or requests.Session()
        self.background = background
        self._last_posted = None
        self._posted_lock = threading.Lock()

    def show(self, record):
        if not self.key:
            raise ChannelUnavailable("AIO key not configured")
        # Feeds keep history; only post when the displayed value changes
        with self._posted_lock:
            if record.level_text == self._last_posted:
                return
            self._last_posted = record.level_text
        if self.background:
            threading.Thread(target=self._post, args=(record.level_text, record.level), daemon=True).start()
        else:
            self._post(record.level_text, record.level)

    def clear(self):
        with self._posted_lock:
            self._last_posted = None

    def _forget(self, level_text):
        # A newer show() may have moved on while this post was in flight
        with self._posted_lock:
            if self._last_posted == level_text:
                self._last_posted = None

    def _post(self, level_text, value):
        headers = {'X-AIO-Key': self.key, 'Content-Type': 'application/json'}
        try:
            response = self.session.post(self.feed_url, headers=headers, json={'value': value},
                                         timeout=config.AIO_TIMEOUT_SEC)
        except requests.RequestException as e:
            logger.warning(f"AIO post failed: {e}")
            self._forget(level_text)
            return False
        if response.status_code != 200:
            logger.warning(f"AIO post rejected ({response.status_code}): {response.text}")
            self._forget(level_text)
            return False
        logger.debug(f"AIO feed updated: {value}")
        return True
