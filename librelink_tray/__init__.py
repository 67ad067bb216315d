"""LibreLinkUp tray monitor core."""

from .app import TrayApp
from .exceptions import (
    AuthenticationError,
    DataFetchError,
    InvalidLoginRequest,
    LibreLinkUpError,
    NoDataError,
)
from .models import Credentials, Region
from .sink import DisplaySink, LoggingSink

__all__ = [
    "AuthenticationError",
    "Credentials",
    "DataFetchError",
    "DisplaySink",
    "InvalidLoginRequest",
    "LibreLinkUpError",
    "LoggingSink",
    "NoDataError",
    "Region",
    "TrayApp",
]
