"""In-memory credential store."""

from __future__ import annotations

import logging

from .models import Credentials

_LOGGER = logging.getLogger(__name__)


class CredentialStore:
    """Holds the single active credential set for the process lifetime.

    Values are replaced whole, so a reader never sees a partial update.
    """

    def __init__(self) -> None:
        self._credentials: Credentials | None = None

    def set(self, credentials: Credentials) -> None:
        if self._credentials is not None:
            _LOGGER.debug("Replacing credentials of %s", self._credentials.email)
        self._credentials = credentials

    def get(self) -> Credentials | None:
        return self._credentials

    def clear(self) -> None:
        self._credentials = None

    @property
    def is_logged_in(self) -> bool:
        return self._credentials is not None
