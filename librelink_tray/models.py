"""Models for the LibreLinkUp tray monitor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

import voluptuous as vol


class Region(str, Enum):
    """Deployment zone selecting the LibreLinkUp API host."""

    EU = "EU"
    US = "US"


class RegionEndpoints(NamedTuple):
    """Auth and data URLs of one region."""

    auth: str
    data: str


@dataclass(frozen=True)
class Credentials:
    """Login credentials of the single active account."""

    email: str
    password: str
    region: Region

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***', region={self.region.value})"


_NON_EMPTY_STR = vol.All(str, vol.Length(min=1))

LOGIN_SCHEMA = vol.Schema(
    {
        vol.Required("email"): _NON_EMPTY_STR,
        vol.Required("password"): _NON_EMPTY_STR,
        vol.Required("region"): vol.All(str, vol.Upper, vol.Coerce(Region)),
    },
    extra=vol.REMOVE_EXTRA,
)


def parse_login_request(login_data: dict[str, Any]) -> Credentials:
    """Validate a login request from the shell and build credentials.

    Raises:
        voluptuous.Invalid: if a field is missing, empty or the region is unknown
    """
    data = LOGIN_SCHEMA(login_data)
    return Credentials(
        email=data["email"],
        password=data["password"],
        region=data["region"],
    )
