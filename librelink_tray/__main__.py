"""Headless runner: log in once and log every glucose update."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys

from .app import TrayApp
from .const import CONF_EMAIL, CONF_PASSWORD, CONF_REGION
from .models import Region
from .sink import LoggingSink

_LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="librelink-tray",
        description="Poll LibreLinkUp and log the latest glucose reading every minute.",
    )
    parser.add_argument("--email", required=True, help="LibreLinkUp account email")
    parser.add_argument("--password", help="account password (prompted when omitted)")
    parser.add_argument(
        "--region",
        default=Region.EU.value,
        type=str.upper,
        choices=[region.value for region in Region],
        help="API region (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: %(default)s)",
    )
    return parser


async def async_run(login_data: dict[str, str]) -> int:
    app = TrayApp(LoggingSink())
    try:
        if not await app.async_handle_login(login_data):
            return 1
        # Polls until the process is interrupted.
        await asyncio.Event().wait()
    finally:
        await app.async_close()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    password = args.password or getpass.getpass("LibreLinkUp password: ")
    login_data = {
        CONF_EMAIL: args.email,
        CONF_PASSWORD: password,
        CONF_REGION: args.region,
    }

    try:
        return asyncio.run(async_run(login_data))
    except KeyboardInterrupt:
        _LOGGER.info("Interrupted, shutting down")
        return 0


if __name__ == "__main__":
    sys.exit(main())
