"""Orchestration of login, polling and the display sink."""

from __future__ import annotations

import logging
from typing import Any, Callable

import aiohttp
import voluptuous as vol

from .auth import LibreLinkUpAuthClient
from .client import LibreLinkUpDataClient
from .const import DEFAULT_UPDATE_INTERVAL, LOGIN_ERROR_CHANNEL
from .exceptions import InvalidLoginRequest, LibreLinkUpError
from .models import parse_login_request
from .poller import GlucosePoller
from .sink import DisplaySink
from .store import CredentialStore

_LOGGER = logging.getLogger(__name__)

Reply = Callable[[str, Any], None]


class TrayApp:
    """Owns the session state of the tray monitor.

    One instance replaces the module-level globals of a typical tray
    script: the credential store, the poll timer and the shell reference.
    """

    def __init__(
        self,
        sink: DisplaySink,
        session: aiohttp.ClientSession | None = None,
        update_interval: float = DEFAULT_UPDATE_INTERVAL,
    ) -> None:
        """Initialize the app.

        Args:
            sink: presentation shell receiving readings and errors
            session: aiohttp client session; when omitted one is created
                (and later closed), so the app must then be built inside a
                running event loop, as `__main__.async_run` does
            update_interval: seconds between periodic fetch cycles
        """
        self.sink = sink
        self._owns_session = session is None
        self.session = session if session is not None else aiohttp.ClientSession()
        self.store = CredentialStore()
        self.auth_client = LibreLinkUpAuthClient(self.session)
        self.data_client = LibreLinkUpDataClient(self.session)
        self.poller = GlucosePoller(
            self.auth_client,
            self.data_client,
            self.store,
            sink,
            update_interval=update_interval,
        )

    async def async_handle_login(
        self, login_data: dict[str, Any], reply: Reply | None = None
    ) -> bool:
        """Handle a login request from the shell.

        On success the credentials are stored, the main popup is shown and
        polling starts with an immediate fetch. On failure the message is
        sent on the ``loginError`` channel and nothing is started.
        """
        _LOGGER.info("Login event received")
        reply = reply or self.sink.send

        try:
            try:
                credentials = parse_login_request(login_data)
            except vol.Invalid as err:
                raise InvalidLoginRequest(f"Invalid login request: {err}") from err
            await self.auth_client.authenticate(credentials)
        except LibreLinkUpError as err:
            _LOGGER.warning("Login failed: %s", err.message)
            reply(LOGIN_ERROR_CHANNEL, err.message)
            return False

        self.store.set(credentials)
        self.sink.close_login()
        self.sink.show_main()
        self.poller.start()
        _LOGGER.info("Logged in as %s", credentials.email)
        return True

    def handle_tray_click(self) -> None:
        """Show the latest reading when logged in, otherwise ask for a login."""
        _LOGGER.debug("Tray icon clicked")
        if self.store.is_logged_in:
            self.sink.show_main()
            self.poller.request_refresh()
        else:
            self.sink.open_login()

    def update_tray_icon(self, image: Any) -> None:
        """Hand a new tray image from the renderer to the shell unchanged."""
        _LOGGER.debug("Updating tray icon")
        self.sink.set_tray_image(image)

    def logout(self) -> None:
        """Forget the credentials and stop polling."""
        self.store.clear()
        self.poller.stop()
        _LOGGER.info("Logged out")

    async def async_close(self) -> None:
        """Stop polling and release the HTTP session."""
        await self.poller.async_shutdown()
        if self._owns_session:
            await self.session.close()
