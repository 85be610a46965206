"""
Water tracker host process: builds one engine and wires it to the presenter,
the command gateway and the transports.

Usage:
  python3 -m water_tracker                  # console loop
  python3 -m water_tracker --headless --web # HTTP + Socket.IO only
  python3 -m water_tracker --mqtt           # also listen for MQTT commands
"""
import argparse
import logging
import sys
import time

from . import config
from .channels import AioFeedChannel, LogChannel, MqttStatusChannel, SocketIOChannel
from .engine import TrackingEngine
from .gateway import CommandGateway
from .logging_setup import setup_logging
from .presenter import StatusPresenter

logger = logging.getLogger("WaterTracker")

HELP_TEXT = """
Commands:
  start       - Start tracking (decay every {interval:g}s)
  stop        - Stop tracking
  add [ml]    - Add water (default {glass:g} ml)
  query       - Show current level
  help        - Show this help
  exit        - Quit
"""


class WaterTracker:
    """Composition root: owns the single TrackingEngine of the process."""

    def __init__(self, engine=None, channels=None):
        self.engine = engine or TrackingEngine()
        self.presenter = StatusPresenter(channels if channels is not None else [LogChannel()])
        self.presenter.attach(self.engine)
        self.gateway = CommandGateway(self.engine)
        self.mqtt = None
        self.app = None
        self.socketio = None

    def enable_mqtt(self):
        from .mqtt_bridge import MqttBridge

        self.mqtt = MqttBridge(self.gateway)
        self.presenter.add_channel(MqttStatusChannel(self.mqtt.client))
        return self.mqtt.start()

    def enable_aio(self):
        self.presenter.add_channel(AioFeedChannel())

    def enable_web(self):
        from .web_server import create_app

        self.app, self.socketio = create_app(self.gateway, self.presenter)
        self.presenter.add_channel(SocketIOChannel(self.socketio))
        return self.app

    def start(self, headless=False):
        self.gateway.submit({"cmd": "start"})
        if not headless:
            self.ui_loop()
        else:
            logger.info("Water tracker started in HEADLESS mode.")

    def shutdown(self):
        self.engine.close()
        if self.mqtt:
            self.mqtt.stop()
        logger.info("Shutdown complete")

    def health(self):
        snapshot = self.engine.query()
        return {
            "running": snapshot.running,
            "level": round(snapshot.level, 1),
            "decay_armed": self.engine.scheduler.armed,
            "mqtt_connected": bool(self.mqtt and self.mqtt.client.is_connected()),
        }

    def handle_input(self, user_input):
        """Route one console line. Returns False when the loop should end."""
        parts = user_input.strip().split()
        if not parts:
            return True
        cmd = parts[0].lower()

        if cmd in ("exit", "quit", "q"):
            return False
        if cmd in ("help", "?"):
            print(HELP_TEXT.format(interval=self.engine.scheduler.interval, glass=config.GLASS_OF_WATER_ML))
            return True

        message = {"cmd": cmd}
        if len(parts) > 1:
            message["amount"] = parts[1]
        reply = self.gateway.submit(message)
        if reply["ok"]:
            state = "RUNNING" if reply["running"] else "STOPPED"
            print(f"💧 {reply['level']:.1f} ml  [{state}]")
        else:
            print(f"❓ {reply['error']} (type 'help' for commands)")
        return True

    def ui_loop(self):
        print("\n--- Water Tracker ---")
        print("Type 'help' for commands, 'exit' to quit.\n")
        while True:
            try:
                if not self.handle_input(input("water> ")):
                    break
            except (EOFError, KeyboardInterrupt):
                break
        logger.info("Exiting...")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Water tracker: decaying hydration level with a status surface")
    ap.add_argument("--headless", action="store_true", help="No console loop")
    ap.add_argument("--web", action="store_true", help="Serve the HTTP API and dashboard socket")
    ap.add_argument("--mqtt", action="store_true", help="Listen for commands on MQTT and publish status")
    ap.add_argument("--aio", action="store_true", help="Post the level to an Adafruit IO feed")
    ap.add_argument("--log-dir", metavar="DIR", help="Directory for rotating log files")
    args = ap.parse_args(argv)

    setup_logging(args.log_dir)
    tracker = WaterTracker()
    if args.mqtt:
        tracker.enable_mqtt()
    if args.aio:
        tracker.enable_aio()
    if args.web:
        tracker.enable_web()

    try:
        if args.web:
            tracker.start(headless=True)
            # Host 0.0.0.0 to be accessible from LAN
            tracker.socketio.run(tracker.app, host=config.WEB_HOST, port=config.WEB_PORT,
                                 debug=False, use_reloader=False, allow_unsafe_werkzeug=True)
        else:
            tracker.start(headless=args.headless)
            if args.headless:
                # Nothing else keeps the process alive
                while True:
                    time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        tracker.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
