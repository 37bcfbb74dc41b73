"""Constants for pylifxcloud library."""

from __future__ import annotations


# API Configuration
DEFAULT_BASE_URL = "https://api.lifx.com"
API_VERSION_PATH = "/v1"
DEFAULT_TIMEOUT = 30  # seconds

# Retry Configuration
DEFAULT_ATTEMPTS = 1
MAX_ATTEMPTS = 255
DEFAULT_RATE_LIMIT_WAIT = 60.0  # seconds, used when x-ratelimit-reset is missing
RATE_LIMIT_RESET_HEADER = "x-ratelimit-reset"

# Color Validation
HUE_MIN = 0
HUE_MAX = 360
SATURATION_MIN = 0.0
SATURATION_MAX = 1.0
BRIGHTNESS_MIN = 0.0
BRIGHTNESS_MAX = 1.0
KELVIN_MIN = 1500
KELVIN_MAX = 9000
RGB_STR_LENGTH = 6

# Zones
ZONE_MIN = 0
ZONE_MAX = 255

# Cycle directions
CYCLE_FORWARD = "forward"
CYCLE_BACKWARD = "backward"
