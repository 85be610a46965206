import json
import logging

import paho.mqtt.client as mqtt

from .. import config
from ..presenter import ChannelUnavailable

logger = logging.getLogger("WaterTracker")


class MqttStatusChannel:
    """Retained status message; new subscribers see the current level at once."""
    name = "mqtt"

    def __init__(self, client, topic=config.MQTT_STATUS_TOPIC):
        self.client = client
        self.topic = topic

    def _publish(self, payload):
        if self.client is None or not self.client.is_connected():
            raise ChannelUnavailable("MQTT client not connected")
        info = self.client.publish(self.topic, payload, qos=1, retain=True)
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            raise ChannelUnavailable(f"publish failed: {mqtt.error_string(info.rc)}")

    def show(self, record):
        self._publish(json.dumps(record.as_dict()))

    def clear(self):
        # Empty retained payload deletes the retained message on the broker
        self._publish(b"")
