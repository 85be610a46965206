"""
Tracking engine: the single owner of the hydration level and tracking state.

Every mutation (commands and decay ticks) runs under one lock and notifies
listeners before the lock is released, so a tick and an add_water can never
interleave halfway.
"""
import logging
import math
import numbers
import threading

from . import config
from .scheduler import DecayScheduler
from .store import LevelStore, TrackingState

logger = logging.getLogger("WaterTracker")


class InvalidAmountError(ValueError):
    """Raised for a non-positive, non-finite or non-numeric water amount."""


def validate_amount(amount):
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        raise InvalidAmountError(f"Amount must be a number, got {amount!r}")
    amount = float(amount)
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmountError(f"Amount must be a positive finite number, got {amount!r}")
    return amount


class TrackingEngine:
    def __init__(self, decay_per_tick=None, interval=None, initial_level=0.0):
        self.decay_per_tick = config.DECAY_PER_TICK_ML if decay_per_tick is None else decay_per_tick
        self.store = LevelStore(initial_level)
        self.scheduler = DecayScheduler(
            self._on_tick,
            config.DECAY_INTERVAL_SEC if interval is None else interval,
        )
        self._lock = threading.RLock()
        self._listeners = []
        self._withdraw_listeners = []

    # --- Listeners ---
    def add_listener(self, on_change, on_stop=None):
        """on_change(snapshot) after start/add/decay; on_stop() after stop."""
        self._listeners.append(on_change)
        if on_stop is not None:
            self._withdraw_listeners.append(on_stop)

    def _notify(self):
        snapshot = self.store.snapshot()
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Status listener failed")
        return snapshot

    # --- Commands ---
    @property
    def state(self):
        return self.store.state

    @property
    def running(self):
        return self.store.running

    def start(self):
        with self._lock:
            if self.store.state is TrackingState.RUNNING:
                logger.debug("Start ignored: already running")
                return self.store.snapshot()
            self.store.state = TrackingState.RUNNING
            self.scheduler.arm()
            logger.info("Tracking started at %.1f ml", self.store.level)
            return self._notify()

    def stop(self):
        with self._lock:
            if self.store.state is TrackingState.STOPPED:
                return self.store.snapshot()
            self.store.state = TrackingState.STOPPED
            handle = self.scheduler.disarm(wait=False)
            logger.info("Tracking stopped at %.1f ml", self.store.level)
            for listener in self._withdraw_listeners:
                try:
                    listener()
                except Exception:
                    logger.exception("Status withdraw failed")
            snapshot = self.store.snapshot()
        # Join outside the lock: the tick thread may be waiting on it
        self.scheduler.join(handle)
        return snapshot

    def add_water(self, amount=None):
        amount = validate_amount(config.GLASS_OF_WATER_ML if amount is None else amount)
        with self._lock:
            if not math.isfinite(self.store.level + amount):
                raise InvalidAmountError(f"Amount {amount!r} would overflow the level")
            self.store.add(amount)
            logger.info(f"Water added: +{amount:.1f} ml (level {self.store.level:.1f} ml)")
            return self._notify()

    def query(self):
        with self._lock:
            return self.store.snapshot()

    def decrease(self):
        """Apply one decay tick, clamped at zero."""
        with self._lock:
            self.store.subtract(self.decay_per_tick)
            logger.debug(f"Decay tick: level {self.store.level:.3f} ml")
            return self._notify()

    def _on_tick(self, handle):
        with self._lock:
            # Stale ticks from a cancelled handle must not touch state
            if self.store.state is not TrackingState.RUNNING or not self.scheduler.is_current(handle):
                return
            self.decrease()

    def close(self):
        self.stop()
