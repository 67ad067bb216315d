"""Data client for the LibreLinkUp connections endpoint."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import aiohttp

from .const import API_ENDPOINTS, NO_DATA_MESSAGE, PRODUCT, VERSION
from .exceptions import DataFetchError, NoDataError
from .models import Region

_LOGGER = logging.getLogger(__name__)


class LibreLinkUpDataClient:
    """Fetches the latest glucose measurement of the authenticated account."""

    def __init__(self, session: aiohttp.ClientSession) -> None:
        """Initialize the data client."""
        self.session = session

    async def fetch_latest_measurement(self, token: str, region: Region) -> Any:
        """Fetch ``data[0].glucoseMeasurement`` from the region's data URL.

        The measurement is returned verbatim; its fields are not interpreted.

        Raises:
            DataFetchError: on a non-success HTTP status or a transport failure
            NoDataError: when the response holds no measurement
        """
        url = API_ENDPOINTS[region].data
        headers = {
            "Authorization": f"Bearer {token}",
            "product": PRODUCT,
            "version": VERSION,
        }

        _LOGGER.debug("Fetching glucose data from %s", url)
        _LOGGER.debug(
            "Request headers (token redacted): %s",
            {k: v if k != "Authorization" else "***REDACTED***" for k, v in headers.items()},
        )

        try:
            start_time = time.time()
            async with self.session.get(url, headers=headers) as response:
                request_duration = time.time() - start_time
                _LOGGER.debug(
                    "Glucose data request completed in %.2f seconds. Status: %d",
                    request_duration,
                    response.status,
                )

                if not 200 <= response.status < 300:
                    _LOGGER.error(
                        "Error fetching glucose data: %d %s", response.status, response.reason
                    )
                    raise DataFetchError(
                        f"Failed to fetch glucose data: {response.status} {response.reason}",
                        status=response.status,
                        reason=response.reason,
                    )

                try:
                    payload = await response.json(content_type=None)
                except ValueError as err:
                    _LOGGER.error("Glucose data response is not valid JSON: %s", err)
                    raise NoDataError(NO_DATA_MESSAGE) from err
        except asyncio.TimeoutError as err:
            _LOGGER.error("Timeout fetching glucose data from LibreLinkUp")
            raise DataFetchError("Failed to fetch glucose data: timeout") from err
        except aiohttp.ClientError as err:
            _LOGGER.error("HTTP client error fetching glucose data: %s", err)
            raise DataFetchError(f"Failed to fetch glucose data: {err}") from err

        _LOGGER.debug("Glucose data response: %s", payload)

        connections = payload.get("data") if isinstance(payload, dict) else None
        if not connections or not isinstance(connections, list):
            raise NoDataError(NO_DATA_MESSAGE)

        first = connections[0]
        measurement = first.get("glucoseMeasurement") if isinstance(first, dict) else None
        if not measurement:
            raise NoDataError(NO_DATA_MESSAGE)

        return measurement
