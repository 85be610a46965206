from .aio import AioFeedChannel
from .dashboard import SocketIOChannel
from .log import LogChannel
from .mqtt import MqttStatusChannel

__all__ = ["AioFeedChannel", "LogChannel", "MqttStatusChannel", "SocketIOChannel"]
