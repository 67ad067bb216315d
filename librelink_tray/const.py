"""Constants for the LibreLinkUp tray monitor."""

from types import MappingProxyType

from .models import Region, RegionEndpoints

# Login request keys
CONF_EMAIL = "email"
CONF_PASSWORD = "password"
CONF_REGION = "region"

# API constants
PRODUCT = "llu.android"
VERSION = "4.7.1"

API_ENDPOINTS = MappingProxyType(
    {
        Region.EU: RegionEndpoints(
            auth="https://api-eu.libreview.io/llu/auth/login",
            data="https://api-eu.libreview.io/llu/connections",
        ),
        Region.US: RegionEndpoints(
            auth="https://api.libreview.io/llu/auth/login",
            data="https://api.libreview.io/llu/connections",
        ),
    }
)

# Default update interval in seconds (1 minute)
DEFAULT_UPDATE_INTERVAL = 60

# Display sink channels
UPDATE_GLUCOSE_CHANNEL = "updateGlucose"
LOGIN_ERROR_CHANNEL = "loginError"

AUTH_FAILED_MESSAGE = "Authentication failed"
NO_DATA_MESSAGE = "No glucose data available in the response"
