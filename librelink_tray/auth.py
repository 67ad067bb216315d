"""Authentication client for the LibreLinkUp API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from .const import API_ENDPOINTS, AUTH_FAILED_MESSAGE, PRODUCT, VERSION
from .exceptions import AuthenticationError
from .models import Credentials

_LOGGER = logging.getLogger(__name__)


class LibreLinkUpAuthClient:
    """Exchanges credentials for a bearer token.

    A fresh token is requested on every call; nothing is cached.
    """

    def __init__(self, session: aiohttp.ClientSession) -> None:
        """Initialize the auth client.

        Args:
            session: aiohttp client session
        """
        self.session = session

    async def authenticate(self, credentials: Credentials) -> str:
        """Log in to the region of ``credentials``.

        Returns:
            The bearer token from ``data.authTicket.token``

        Raises:
            AuthenticationError: on a non-zero API status or a transport failure
        """
        url = API_ENDPOINTS[credentials.region].auth
        headers = {
            "Content-Type": "application/json",
            "product": PRODUCT,
            "version": VERSION,
        }
        login_data = {
            "email": credentials.email,
            "password": credentials.password,
        }

        _LOGGER.info("Authenticating user %s (region %s)", credentials.email, credentials.region.value)

        try:
            async with self.session.post(url, headers=headers, json=login_data) as response:
                data = await response.json(content_type=None)
        except asyncio.TimeoutError as err:
            _LOGGER.error("Timeout connecting to LibreLinkUp during authentication")
            raise AuthenticationError(f"{AUTH_FAILED_MESSAGE}: timeout") from err
        except aiohttp.ClientError as err:
            _LOGGER.error("Error authenticating with LibreLinkUp: %s", err)
            raise AuthenticationError(f"{AUTH_FAILED_MESSAGE}: {err}") from err
        except ValueError as err:
            _LOGGER.error("Authentication response is not valid JSON: %s", err)
            raise AuthenticationError(AUTH_FAILED_MESSAGE) from err

        if not isinstance(data, dict):
            _LOGGER.error("Unexpected authentication response: %r", data)
            raise AuthenticationError(AUTH_FAILED_MESSAGE)

        status = data.get("status")
        _LOGGER.debug("Authentication response status: %s", status)

        if status != 0:
            message = _error_message(data) or AUTH_FAILED_MESSAGE
            _LOGGER.error("Login failed (status %s): %s", status, message)
            raise AuthenticationError(message)

        try:
            token = data["data"]["authTicket"]["token"]
        except (KeyError, TypeError) as err:
            _LOGGER.error("Authentication response has no auth ticket")
            raise AuthenticationError(AUTH_FAILED_MESSAGE) from err

        if not token:
            raise AuthenticationError(AUTH_FAILED_MESSAGE)

        _LOGGER.debug("Authentication succeeded for %s", credentials.email)
        return token


def _error_message(data: dict[str, Any]) -> str | None:
    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None
