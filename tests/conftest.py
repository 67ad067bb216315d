"""Shared fixtures for the LibreLinkUp tray monitor tests."""

from unittest.mock import AsyncMock, MagicMock, Mock

import aiohttp
import pytest

from librelink_tray.models import Credentials, Region
from librelink_tray.sink import DisplaySink


def make_response(status=200, json_data=None, reason="OK"):
    """Build a mock aiohttp response usable with ``async with``."""
    response = Mock()
    response.status = status
    response.reason = reason
    response.json = AsyncMock(return_value=json_data)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=None)
    return context, response


class RecordingSink(DisplaySink):
    """Sink that records every call for assertions."""

    def __init__(self):
        self.messages = []
        self.tray_images = []
        self.events = []

    def send(self, channel, payload):
        self.messages.append((channel, payload))

    def set_tray_image(self, image):
        self.tray_images.append(image)

    def show_main(self):
        self.events.append("show_main")

    def open_login(self):
        self.events.append("open_login")

    def close_login(self):
        self.events.append("close_login")


@pytest.fixture
def mock_session():
    """Create a mock aiohttp session."""
    return Mock(spec=aiohttp.ClientSession)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def credentials():
    return Credentials(email="a@b.com", password="x", region=Region.EU)


@pytest.fixture
def successful_auth_response():
    """Mock successful authentication response."""
    return {
        "status": 0,
        "data": {"authTicket": {"token": "T", "expires": 1700000000, "duration": 15552000000}},
    }


@pytest.fixture
def connections_response():
    """Mock connections response with one patient."""
    return {
        "status": 0,
        "data": [
            {
                "patientId": "patient-1",
                "glucoseMeasurement": {"value": 110},
            }
        ],
    }
