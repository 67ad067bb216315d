"""Display sink interface between the core and the presentation shell."""

from __future__ import annotations

import abc
import logging
from typing import Any

from .const import LOGIN_ERROR_CHANNEL, UPDATE_GLUCOSE_CHANNEL

_LOGGER = logging.getLogger(__name__)


class DisplaySink(abc.ABC):
    """Presentation shell driven by the core.

    ``updateGlucose`` payloads are either ``{"measurement": ...}`` or
    ``{"error": "..."}``; ``loginError`` payloads are plain strings.
    """

    @abc.abstractmethod
    def send(self, channel: str, payload: Any) -> None:
        """Deliver a message on a named channel."""

    @abc.abstractmethod
    def set_tray_image(self, image: Any) -> None:
        """Replace the tray icon image. The image is opaque to the core."""

    def show_main(self) -> None:
        """Show the reading popup."""

    def open_login(self) -> None:
        """Open the login form."""

    def close_login(self) -> None:
        """Close the login form."""


class LoggingSink(DisplaySink):
    """Headless sink that writes everything to the log."""

    def __init__(self) -> None:
        self.last_payload: Any = None
        self.tray_image: Any = None

    def send(self, channel: str, payload: Any) -> None:
        if channel == UPDATE_GLUCOSE_CHANNEL:
            self.last_payload = payload
            if "error" in payload:
                _LOGGER.warning("Glucose update failed: %s", payload["error"])
            else:
                _LOGGER.info("Glucose reading: %s", _describe(payload["measurement"]))
        elif channel == LOGIN_ERROR_CHANNEL:
            _LOGGER.error("Login failed: %s", payload)
        else:
            _LOGGER.debug("Ignoring message on unknown channel %s", channel)

    def set_tray_image(self, image: Any) -> None:
        self.tray_image = image
        _LOGGER.debug("Tray icon updated")

    def open_login(self) -> None:
        _LOGGER.info("Not logged in; run with --email and --region to log in")


def _describe(measurement: Any) -> str:
    if isinstance(measurement, dict):
        value = measurement.get("ValueInMgPerDl", measurement.get("Value", measurement.get("value")))
        timestamp = measurement.get("Timestamp")
        if value is not None and timestamp:
            return f"{value} mg/dL at {timestamp}"
        if value is not None:
            return f"{value} mg/dL"
    return str(measurement)
