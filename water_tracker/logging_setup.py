"""
Root logger wiring for the tracker process.

Everything at DEBUG goes to a size-rotated file under ``logs/``; the console
only gets ``console_level`` and above. Calling ``setup_logging`` again (tests,
a second ``main``) reuses the handlers that are already installed.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "logs")
LOG_FILE_NAME = "water-tracker.log"
LOG_MAX_BYTES = 1 * 1024 * 1024
LOG_BACKUP_COUNT = 3

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _formatter():
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def _file_handler(log_file, max_bytes, backup_count):
    handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setFormatter(_formatter())
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler(level):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_formatter())
    handler.setLevel(level)
    return handler


def _has_console(root):
    # RotatingFileHandler subclasses StreamHandler; match the exact type
    return any(type(h) is logging.StreamHandler for h in root.handlers)


def setup_logging(log_dir=None, console_level=logging.INFO,
                  max_bytes=LOG_MAX_BYTES, backup_count=LOG_BACKUP_COUNT):
    """Install the file and console handlers on the root logger; return the log file path."""
    log_dir = log_dir or LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, LOG_FILE_NAME)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        root.addHandler(_file_handler(log_file, max_bytes, backup_count))
    if not _has_console(root):
        root.addHandler(_console_handler(console_level))

    budget_mb = max_bytes * (backup_count + 1) / (1024 * 1024)
    root.info(f"Logging to {log_file} (rotating, {budget_mb:.1f} MB max)")
    return log_file
