"""MQTT transport: commands in on one topic, replies out on another."""
import json
import logging

import paho.mqtt.client as mqtt

from . import config

logger = logging.getLogger("WaterTracker")


class MqttBridge:
    def __init__(self, gateway, client=None,
                 command_topic=config.MQTT_COMMAND_TOPIC,
                 reply_topic=config.MQTT_REPLY_TOPIC):
        self.gateway = gateway
        self.command_topic = command_topic
        self.reply_topic = reply_topic
        if client is None:
            client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id="water-tracker")
            if config.MQTT_USER:
                client.username_pw_set(config.MQTT_USER, config.MQTT_PASSWORD)
        self.client = client
        self.client.on_connect = self.on_connect
        self.client.on_message = self.on_message

    def on_connect(self, client, userdata, flags, reason_code, properties=None):
        if reason_code == 0:
            logger.info("✓ Connected to MQTT broker")
            client.subscribe(self.command_topic, qos=1)
            logger.info(f"✓ Subscribed to {self.command_topic}")
        else:
            logger.error(f"✗ MQTT connection failed: {reason_code}")

    def on_message(self, client, userdata, msg):
        logger.info(f"← MQTT {msg.topic}: {msg.payload[:200]!r}")
        reply = self.gateway.submit(msg.payload)
        client.publish(self.reply_topic, json.dumps(reply), qos=1)

    def start(self, broker=config.MQTT_BROKER, port=config.MQTT_PORT):
        try:
            logger.info(f"Connecting to MQTT broker at {broker}:{port}...")
            self.client.connect(broker, port, 60)
        except (OSError, ValueError) as e:
            logger.error(f"✗ Failed to connect to MQTT broker: {e}")
            return False
        self.client.loop_start()
        return True

    def stop(self):
        self.client.loop_stop()
        self.client.disconnect()
