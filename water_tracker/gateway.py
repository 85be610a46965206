"""
Command gateway: the boundary between external callers and the engine.

Accepts command messages as dicts or JSON text:
    {"cmd": "start"} / {"cmd": "stop"} / {"cmd": "query"}
    {"cmd": "add_water", "amount": 250}
and the intent-style form sent by the mobile client:
    {"action": "ADD_WATER", "WATER_AMOUNT": 250}
"""
import enum
import json
import logging
import threading
from typing import NamedTuple, Optional

from . import config
from .engine import InvalidAmountError, validate_amount

logger = logging.getLogger("WaterTracker")


class CommandError(ValueError):
    """Unknown or malformed command; nothing was applied."""


class CommandType(enum.Enum):
    START = "start"
    STOP = "stop"
    ADD_WATER = "add_water"
    QUERY = "query"


class Command(NamedTuple):
    type: CommandType
    amount: Optional[float] = None

    @classmethod
    def add_water(cls, amount=None):
        return cls(CommandType.ADD_WATER, config.GLASS_OF_WATER_ML if amount is None else amount)


# Aliases accepted for the command name (case-insensitive)
_ALIASES = {
    "start": CommandType.START,
    "stop": CommandType.STOP,
    "add": CommandType.ADD_WATER,
    "add_water": CommandType.ADD_WATER,
    "query": CommandType.QUERY,
    "status": CommandType.QUERY,
}
_AMOUNT_KEYS = ("amount", "WATER_AMOUNT", "val")


def _parse_amount(raw):
    if raw is None:
        return config.GLASS_OF_WATER_ML
    if isinstance(raw, str):
        try:
            raw = float(raw.strip())
        except ValueError:
            raise CommandError(f"Invalid amount: {raw!r}")
    try:
        return validate_amount(raw)
    except InvalidAmountError as e:
        raise CommandError(str(e))


def parse_command(message):
    """Turn a dict / JSON string / Command into a Command, or raise CommandError."""
    if isinstance(message, Command):
        if message.type is CommandType.ADD_WATER:
            return Command(CommandType.ADD_WATER, _parse_amount(message.amount))
        return message

    if isinstance(message, (bytes, bytearray)):
        message = message.decode("utf-8", errors="replace")
    if isinstance(message, str):
        try:
            message = json.loads(message)
        except json.JSONDecodeError:
            raise CommandError("Command is not valid JSON")

    if not isinstance(message, dict):
        raise CommandError("Command must be a JSON object")

    name = message.get("cmd", message.get("action"))
    if not isinstance(name, str) or not name.strip():
        raise CommandError("Missing command name")

    cmd_type = _ALIASES.get(name.strip().lower())
    if cmd_type is None:
        raise CommandError(f"Unknown command: {name}")

    if cmd_type is CommandType.ADD_WATER:
        raw = next((message[k] for k in _AMOUNT_KEYS if k in message), None)
        return Command(cmd_type, _parse_amount(raw))
    return Command(cmd_type)


class CommandGateway:
    def __init__(self, engine):
        self.engine = engine
        # One command at a time, in arrival order
        self._lock = threading.Lock()

    def execute(self, command):
        """Apply a Command and return the resulting StatusSnapshot."""
        command = parse_command(command)
        with self._lock:
            if command.type is CommandType.START:
                return self.engine.start()
            elif command.type is CommandType.STOP:
                return self.engine.stop()
            elif command.type is CommandType.ADD_WATER:
                return self.engine.add_water(command.amount)
            return self.engine.query()

    def submit(self, message):
        """Parse and apply an external message. Never raises for bad input."""
        try:
            command = parse_command(message)
        except CommandError as e:
            logger.warning(f"⚠ Rejected command: {e}")
            return {"ok": False, "error": str(e)}

        try:
            snapshot = self.execute(command)
        except InvalidAmountError as e:
            logger.warning(f"⚠ Rejected command: {e}")
            return {"ok": False, "error": str(e)}
        logger.debug(f"← {command.type.value} -> {snapshot}")
        reply = {"ok": True, "cmd": command.type.value}
        reply.update(snapshot.as_dict())
        return reply

    def query(self):
        return self.engine.query()
