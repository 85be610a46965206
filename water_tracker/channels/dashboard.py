from ..presenter import ChannelUnavailable


class SocketIOChannel:
    """Pushes the status to live dashboard clients."""
    name = "dashboard"

    def __init__(self, socketio=None):
        self.socketio = socketio

    def show(self, record):
        if self.socketio is None:
            raise ChannelUnavailable("dashboard not running")
        self.socketio.emit("status", record.as_dict())

    def clear(self):
        if self.socketio is None:
            raise ChannelUnavailable("dashboard not running")
        self.socketio.emit("status_cleared", {})
