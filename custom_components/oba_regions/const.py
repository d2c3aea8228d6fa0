"""Constants for the OneBusAway Regions integration."""
from datetime import timedelta

from homeassistant.const import Platform

from .pyoba.directory import DEFAULT_DIRECTORY_URL, DEFAULT_TIMEOUT  # noqa: F401

DOMAIN = "oba_regions"
DATA_SERVICE = "service"
DATA_CLIENT = "client"
DATA_SETTINGS = "settings"

CONF_DIRECTORY_URL = "directory_url"
CONF_LOCATION_ENTITY = "location_entity"
CONF_SHOW_EXPERIMENTAL = "show_experimental"

# Storage
STORAGE_KEY = f"{DOMAIN}.settings"
STORAGE_VERSION = 1
SAVE_DELAY = 1  # seconds

# Refresh policy
STALENESS_THRESHOLD = timedelta(days=7)
REFRESH_CHECK_INTERVAL = timedelta(hours=6)
REQUEST_TIMEOUT = DEFAULT_TIMEOUT

PLATFORMS = [
    Platform.BUTTON,
    Platform.SELECT,
    Platform.SENSOR,
    Platform.SWITCH,
]

