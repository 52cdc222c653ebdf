"""Command-line control of an NEC display.

Usage:
  nec-control [address] [--port PORT] [-p on|off] [-b 0-100] [-v]

Examples:
  nec-control 10.0.0.240 --power on
  nec-control -a 10.0.0.240 -b 60 -v

Commands are sent one at a time: each reply is read and validated before
the next command goes out.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import DisplayConfig
from .controller import set_backlight, set_power
from .errors import NecControlError
from .protocol.commands import BACKLIGHT_MAX, BACKLIGHT_MIN, POWER_STATES
from .transport.tcp_connection import TCPConnection

logger = logging.getLogger(__name__)


def _backlight_level(text: str) -> int:
    try:
        level = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer {text!r}") from None
    if not BACKLIGHT_MIN <= level <= BACKLIGHT_MAX:
        raise argparse.ArgumentTypeError(
            f"{level} not in range [{BACKLIGHT_MIN} - {BACKLIGHT_MAX}]"
        )
    return level


def build_parser(config: DisplayConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nec-control", description="NEC CONTROL")
    parser.add_argument(
        "address", nargs="?", default=None, help="Address to connect to."
    )
    parser.add_argument(
        "-a", "--address", dest="address_option", default=None,
        help=f"Address to connect to (default: {config.host}).",
    )
    parser.add_argument(
        "--port", type=int, default=config.port,
        help=f"Port to connect to (default: {config.port}).",
    )
    parser.add_argument(
        "-p", "--power", choices=sorted(POWER_STATES), help="Set power to on or off."
    )
    parser.add_argument(
        "-b", "--backlight", type=_backlight_level,
        help="Set backlight to a specific value (0-100).",
    )
    parser.add_argument(
        "--timeout", type=float, default=config.timeout,
        help=f"Reply timeout in seconds (default: {config.timeout:g}).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Speak more to me."
    )
    return parser


def run(host: str, port: int, timeout: float, power: str | None, backlight: int | None) -> None:
    """Connect, send the requested commands in order and disconnect."""
    connection = TCPConnection(host, port, timeout)
    logger.info("Connecting to %s:%d", host, port)
    with connection:
        if power is not None:
            set_power(connection, power == "on")
        if backlight is not None:
            set_backlight(connection, backlight)


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``nec-control``. Returns the process exit code."""
    try:
        config = DisplayConfig.from_env()
    except ValueError as e:
        print(f"Invalid environment configuration: {e}", file=sys.stderr)
        return 1

    args = build_parser(config).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    host = args.address_option or args.address or config.host
    try:
        run(host, args.port, args.timeout, args.power, args.backlight)
    except NecControlError as e:
        print(f'Not able to set the parameter: "{e}"', file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
