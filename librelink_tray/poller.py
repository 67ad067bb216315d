"""Periodic glucose polling."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

from .auth import LibreLinkUpAuthClient
from .client import LibreLinkUpDataClient
from .const import AUTH_FAILED_MESSAGE, DEFAULT_UPDATE_INTERVAL, UPDATE_GLUCOSE_CHANNEL
from .exceptions import LibreLinkUpError
from .sink import DisplaySink
from .store import CredentialStore

_LOGGER = logging.getLogger(__name__)


class GlucosePoller:
    """Runs a fetch cycle now and then on a fixed interval while logged in.

    Every cycle re-authenticates and then fetches the latest measurement.
    Cycles are not serialized: a slow cycle may overlap the next one, and
    results reach the sink in completion order.
    """

    def __init__(
        self,
        auth_client: LibreLinkUpAuthClient,
        data_client: LibreLinkUpDataClient,
        store: CredentialStore,
        sink: DisplaySink,
        update_interval: float = DEFAULT_UPDATE_INTERVAL,
    ) -> None:
        """Initialize the poller."""
        self.auth_client = auth_client
        self.data_client = data_client
        self.store = store
        self.sink = sink
        self.update_interval = update_interval

        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

        self.update_count = 0
        self.consecutive_failures = 0
        self.last_successful_update: datetime | None = None

    @property
    def is_active(self) -> bool:
        """Return True while a recurring timer is armed."""
        return self._timer is not None

    def start(self) -> None:
        """Run one cycle immediately and arm the recurring timer.

        Calling this while active replaces the timer; in-flight cycles keep
        running.
        """
        if self._timer is not None:
            _LOGGER.debug("Replacing existing update timer")
            self._timer.cancel()
            self._timer = None

        _LOGGER.info("Starting periodic update every %s seconds", self.update_interval)
        self.request_refresh()
        self._schedule()

    def stop(self) -> None:
        """Cancel the recurring timer."""
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None
        _LOGGER.info("Periodic update stopped")

    def request_refresh(self) -> asyncio.Task:
        """Spawn one fetch cycle without waiting for it."""
        task = asyncio.get_running_loop().create_task(self.async_refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _schedule(self) -> None:
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.update_interval, self._tick)

    def _tick(self) -> None:
        self._schedule()
        if self.store.get() is None:
            _LOGGER.debug("Periodic update skipped: no credentials")
            return
        _LOGGER.info("Periodic update: updating glucose level")
        self.request_refresh()

    async def async_refresh(self) -> dict[str, Any] | None:
        """Run one fetch cycle and deliver its outcome to the sink.

        Returns:
            The payload sent on the update channel, or None when there were
            no credentials to use
        """
        credentials = self.store.get()
        if credentials is None:
            _LOGGER.debug("No credentials, skipping glucose update")
            return None

        self.update_count += 1
        update_number = self.update_count
        _LOGGER.info(
            "Starting glucose update #%d (last successful: %s)",
            update_number,
            self.last_successful_update.strftime("%Y-%m-%d %H:%M:%S")
            if self.last_successful_update
            else "Never",
        )

        try:
            token = await self.auth_client.authenticate(credentials)
            measurement = await self.data_client.fetch_latest_measurement(
                token, credentials.region
            )
        except LibreLinkUpError as err:
            self.consecutive_failures += 1
            _LOGGER.error(
                "Glucose update #%d failed with error: %s. Consecutive failures: %d",
                update_number,
                err,
                self.consecutive_failures,
            )
            payload = {"error": err.message}
        except Exception as err:  # pylint: disable=broad-except
            self.consecutive_failures += 1
            _LOGGER.exception(
                "Glucose update #%d failed with unexpected error. Consecutive failures: %d",
                update_number,
                self.consecutive_failures,
            )
            payload = {"error": str(err) or AUTH_FAILED_MESSAGE}
        else:
            self.consecutive_failures = 0
            self.last_successful_update = datetime.now()
            _LOGGER.info("Glucose update #%d completed successfully", update_number)
            _LOGGER.debug("Sending glucose data to display: %s", measurement)
            payload = {"measurement": measurement}

        self.sink.send(UPDATE_GLUCOSE_CHANNEL, payload)
        return payload

    async def _async_wait_pending(self) -> None:
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def async_shutdown(self) -> None:
        """Stop the timer and cancel cycles still in flight."""
        self.stop()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
