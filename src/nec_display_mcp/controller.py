"""Sequential command dispatch over an open connection."""

from __future__ import annotations

import logging

from .protocol.commands import (
    COMMANDS,
    POWER_OFF,
    POWER_ON,
    CommandCode,
    build_command,
    build_set_backlight,
)
from .protocol.parser import Reply, expected_reply_type, format_hex, parse_reply
from .transport.tcp_connection import TCPConnection

logger = logging.getLogger(__name__)


def _exchange(connection: TCPConnection, code: CommandCode, frame: bytes) -> Reply:
    request_type = COMMANDS[code].message_type
    logger.debug("Sending %s: %s", code.value, format_hex(frame))
    response = connection.send_and_receive(frame)
    reply = parse_reply(response, request_type)
    logger.debug("Reply: %r", reply.frame)
    if not reply.matches_request:
        logger.warning(
            "Unexpected reply type %r to %s, expected %r",
            chr(reply.frame.message_type),
            code.value,
            chr(expected_reply_type(request_type)),
        )
    return reply


def send_command(connection: TCPConnection, code: CommandCode, value: int) -> Reply:
    """Encode a command, send it and wait for the validated reply.

    The reply must arrive before another command is sent; the protocol has
    no way to correlate replies with requests.
    """
    return _exchange(connection, code, build_command(code, value))


def set_power(connection: TCPConnection, on: bool) -> Reply:
    """Switch the display on or off."""
    return send_command(connection, CommandCode.POWER, POWER_ON if on else POWER_OFF)


def set_backlight(connection: TCPConnection, level: int) -> Reply:
    """Set the backlight level (0-100)."""
    return _exchange(connection, CommandCode.BACKLIGHT, build_set_backlight(level))
