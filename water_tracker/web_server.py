import logging

from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit

from . import config
from .presenter import build_record

logger = logging.getLogger("WebServer")


def create_app(gateway, presenter=None):
    """Build the HTTP/Socket.IO front door for one CommandGateway."""
    app = Flask(__name__)
    socketio = SocketIO(app, cors_allowed_origins="*", async_mode='threading')

    def _reply(result):
        return jsonify(result), (200 if result.get("ok") else 400)

    # --- API: Commands ---
    @app.route('/api/water/cmd', methods=['POST'])
    def water_cmd():
        data = request.get_json(silent=True)
        if data is None:
            data = request.get_data()
        return _reply(gateway.submit(data))

    @app.route('/api/tracking/start', methods=['POST'])
    def tracking_start():
        return _reply(gateway.submit({"cmd": "start"}))

    @app.route('/api/tracking/stop', methods=['POST'])
    def tracking_stop():
        return _reply(gateway.submit({"cmd": "stop"}))

    @app.route('/api/water/add', methods=['POST'])
    def water_add():
        data = request.get_json(silent=True) or {}
        message = {"cmd": "add_water"}
        if "amount" in data:
            message["amount"] = data["amount"]
        return _reply(gateway.submit(message))

    # --- API: Status (Polling) ---
    @app.route('/api/data', methods=['GET'])
    def get_data():
        snapshot = gateway.query()
        record = presenter.last_record if presenter else None
        return jsonify({
            "hydration": snapshot.as_dict(),
            "status": (record or build_record(snapshot)).as_dict(),
        })

    @app.route('/api/health', methods=['GET'])
    def health():
        engine = gateway.engine
        return jsonify({
            "ok": True,
            "running": engine.running,
            "decay_armed": engine.scheduler.armed,
            "status_channel": {
                "id": config.STATUS_CHANNEL_ID,
                "name": config.STATUS_CHANNEL_NAME,
                "description": config.STATUS_CHANNEL_DESCRIPTION,
            },
            "channels": [getattr(c, "name", type(c).__name__) for c in presenter.channels] if presenter else [],
        })

    # --- Socket.IO ---
    @socketio.on('connect')
    def on_connect():
        emit('status', build_record(gateway.query()).as_dict())

    @socketio.on('command')
    def on_command(data):
        emit('reply', gateway.submit(data))

    return app, socketio
