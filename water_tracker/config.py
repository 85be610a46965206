import os

# Water Tracker Configuration

# --- Tracking ---
GLASS_OF_WATER_ML = float(os.getenv('GLASS_OF_WATER_ML', '250'))   # Default AddWater amount
DECAY_PER_TICK_ML = float(os.getenv('DECAY_PER_TICK_ML', '0.144'))  # Removed on every decay tick
DECAY_INTERVAL_SEC = float(os.getenv('DECAY_INTERVAL_SEC', '5'))    # Tick cadence while tracking

# --- Status Surface ---
STATUS_TITLE = "My Water Tracker"
STATUS_CHANNEL_ID = "water_tracker_channel"
STATUS_CHANNEL_NAME = "Water Tracker Service"
STATUS_CHANNEL_DESCRIPTION = "Tracks your water consumption"
STATUS_NOTIFICATION_ID = 1
STATUS_PRIORITY = "low"

# --- MQTT ---
MQTT_BROKER = os.getenv('MQTT_BROKER', 'localhost')
MQTT_PORT = int(os.getenv('MQTT_PORT', '1883'))
MQTT_USER = os.getenv('MQTT_USER', '')
MQTT_PASSWORD = os.getenv('MQTT_PASSWORD', '')
MQTT_COMMAND_TOPIC = "water_tracker/commands"
MQTT_REPLY_TOPIC = "water_tracker/replies"
MQTT_STATUS_TOPIC = "water_tracker/status"

# --- Adafruit IO (optional status feed) ---
AIO_USERNAME = os.getenv('AIO_USERNAME', '')
AIO_KEY = os.getenv('AIO_KEY', '')
AIO_FEED = os.getenv('AIO_FEED', 'water-level')
AIO_FEED_URL = f"https://io.adafruit.com/api/v2/{AIO_USERNAME}/feeds/{AIO_FEED}/data"
AIO_TIMEOUT_SEC = 5

# --- Web Server ---
WEB_HOST = os.getenv('WEB_HOST', '0.0.0.0')
WEB_PORT = int(os.getenv('WEB_PORT', '5000'))
