"""Exceptions raised while talking to the LibreLinkUp API."""

from __future__ import annotations


class LibreLinkUpError(Exception):
    """Base error; ``str(err)`` is the message shown to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(LibreLinkUpError):
    """Login was rejected by the API or could not be completed."""


class DataFetchError(LibreLinkUpError):
    """The connections endpoint answered with a non-success status."""

    def __init__(self, message: str, status: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason


class NoDataError(LibreLinkUpError):
    """Well-formed response without any glucose measurement."""


class InvalidLoginRequest(LibreLinkUpError):
    """The login request from the shell failed validation."""
