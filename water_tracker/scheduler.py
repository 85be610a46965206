"""
Decay scheduler: calls back into the engine once per interval while armed.
Runs one daemon thread per armed handle; disarm() stops it and waits for it.
"""
import logging
import threading

logger = logging.getLogger("WaterTracker")


class _TickHandle:
    """One armed periodic callback. Cancelled handles never fire again."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancelled = threading.Event()
        self.thread = threading.Thread(target=self._run, name="decay-tick", daemon=True)

    def _run(self):
        # Event.wait returns True once cancelled
        while not self.cancelled.wait(timeout=self.interval):
            try:
                self.callback(self)
            except Exception:
                logger.exception("Decay tick failed")
        logger.debug("Decay loop ended")

    def cancel(self):
        self.cancelled.set()

    @property
    def active(self):
        return not self.cancelled.is_set()


class DecayScheduler:
    def __init__(self, callback, interval):
        if interval <= 0:
            raise ValueError("Decay interval must be positive")
        self.callback = callback
        self.interval = interval
        self._handle = None
        self._lock = threading.Lock()

    @property
    def armed(self):
        with self._lock:
            return self._handle is not None and self._handle.active

    @property
    def handle_count(self):
        """Outstanding periodic handles (0 or 1)."""
        return 1 if self.armed else 0

    def arm(self):
        """Start ticking. Arming while already armed keeps the current handle."""
        with self._lock:
            if self._handle is not None and self._handle.active:
                return self._handle
            handle = _TickHandle(self.interval, self.callback)
            self._handle = handle
            handle.thread.start()
            logger.info("Decay armed: every %.1fs", self.interval)
            return handle

    def disarm(self, wait=True):
        """Cancel the outstanding handle. A tick already in flight sees
        is_current() return False for it.

        With wait=False the caller joins later through join(), e.g. after
        releasing a lock the tick thread may be blocked on.
        """
        with self._lock:
            handle = self._handle
            self._handle = None
        if handle is None:
            return None
        handle.cancel()
        logger.info("Decay disarmed")
        if wait:
            self.join(handle)
        return handle

    def join(self, handle):
        # A tick may disarm from its own thread; it cannot join itself
        if handle is None or handle.thread is threading.current_thread():
            return
        handle.thread.join(timeout=max(2.0, self.interval))

    def is_current(self, handle):
        with self._lock:
            return handle is self._handle and handle.active
