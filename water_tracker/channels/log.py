import logging

logger = logging.getLogger("WaterTracker")


class LogChannel:
    """Status surface as a log line. Always available."""
    name = "log"

    def __init__(self, log=None):
        self.log = log or logger

    def show(self, record):
        state = "tracking" if record.running else "paused"
        self.log.info(f"{record.title}: {record.text} ({state})")

    def clear(self):
        self.log.info("Status withdrawn")
