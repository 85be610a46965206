"""
Tests for the HTTP API and the dashboard socket.
"""

import pytest

from water_tracker import config
from water_tracker.gateway import CommandGateway
from water_tracker.presenter import StatusPresenter
from water_tracker.web_server import create_app


@pytest.fixture
def web(engine, channel):
    presenter = StatusPresenter([channel]).attach(engine)
    app, socketio = create_app(CommandGateway(engine), presenter)
    app.config["TESTING"] = True
    return app, socketio


def test_start_add_and_read(web):
    app, _ = web
    client = app.test_client()
    assert client.post('/api/tracking/start').status_code == 200
    resp = client.post('/api/water/add', json={"amount": 250})
    assert resp.get_json()["level"] == 250.0

    data = client.get('/api/data').get_json()
    assert data["hydration"] == {"level": 250.0, "running": True}
    assert data["status"]["text"] == "Water Level: 250.0 ml"


def test_generic_command_endpoint(web):
    app, _ = web
    client = app.test_client()
    resp = client.post('/api/water/cmd', json={"cmd": "add_water"})
    assert resp.status_code == 200
    assert resp.get_json()["level"] == 250.0


def test_raw_body_command(web):
    app, _ = web
    resp = app.test_client().post('/api/water/cmd', data='{"cmd": "query"}', content_type="text/plain")
    assert resp.status_code == 200
    assert resp.get_json()["cmd"] == "query"


def test_unknown_command_is_400(web, engine):
    app, _ = web
    resp = app.test_client().post('/api/water/cmd', json={"cmd": "flood"})
    assert resp.status_code == 400
    assert resp.get_json()["ok"] is False
    assert engine.query().level == 0.0


def test_bad_amount_is_400(web):
    app, _ = web
    resp = app.test_client().post('/api/water/add', json={"amount": -3})
    assert resp.status_code == 400


def test_stop_endpoint(web, engine):
    app, _ = web
    client = app.test_client()
    client.post('/api/tracking/start')
    resp = client.post('/api/tracking/stop')
    assert resp.get_json()["running"] is False
    assert engine.scheduler.handle_count == 0
    # Status falls back to a fresh record once withdrawn
    assert client.get('/api/data').get_json()["status"]["level_text"] == "0.0 ml"


def test_health(web):
    app, _ = web
    client = app.test_client()
    client.post('/api/tracking/start')
    health = client.get('/api/health').get_json()
    assert health["ok"] is True
    assert health["running"] is True
    assert health["decay_armed"] is True
    assert health["channels"] == ["recording"]
    assert health["status_channel"] == {
        "id": config.STATUS_CHANNEL_ID,
        "name": "Water Tracker Service",
        "description": "Tracks your water consumption",
    }


def test_socket_connect_sends_status_and_accepts_commands(web):
    app, socketio = web
    client = socketio.test_client(app)
    received = client.get_received()
    assert received[0]["name"] == "status"
    assert received[0]["args"][0]["level_text"] == "0.0 ml"

    client.emit('command', {"cmd": "add_water", "amount": 100})
    reply = [r for r in client.get_received() if r["name"] == "reply"][0]
    assert reply["args"][0]["level"] == 100.0
    client.disconnect()
