"""MCP server entry point for NEC display control.

Exposes power and backlight control as tools via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import DisplayConfig
from .controller import send_command as _send_command
from .controller import set_backlight as _set_backlight
from .controller import set_power as _set_power
from .errors import NecControlError
from .protocol.commands import POWER_STATES, CommandCode
from .protocol.parser import Reply
from .transport.tcp_connection import TCPConnection

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "nec-display",
    instructions="Control NEC displays over LAN: power and backlight.",
)

# Global connection state
_connection: TCPConnection | None = None


def _get_connection() -> TCPConnection:
    """Get the active TCP connection, raising if not connected."""
    if _connection is None or not _connection.connected:
        raise RuntimeError(
            "Not connected to display. Use the 'connect' tool first."
        )
    return _connection


def _reply_to_dict(reply: Reply) -> dict[str, Any]:
    return {
        "reply_type": chr(reply.frame.message_type),
        "payload": reply.frame.payload.decode("ascii", errors="replace"),
        "matches_request": reply.matches_request,
    }


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(host: str | None = None, port: int | None = None) -> dict[str, Any]:
    """Open a TCP session to the display.

    Args:
        host: Display address (defaults to NEC_DISPLAY_HOST or 10.0.0.240).
        port: External control port (defaults to NEC_DISPLAY_PORT or 7142).
    """
    global _connection
    if _connection is not None and _connection.connected:
        return {
            "connected": True,
            "message": "Already connected",
            "host": _connection.display_info.host,
        }

    try:
        config = DisplayConfig.from_env()
    except ValueError as e:
        return {"connected": False, "error": f"Invalid environment configuration: {e}"}

    connection = TCPConnection(
        host or config.host,
        port if port is not None else config.port,
        config.timeout,
    )
    try:
        info = connection.open()
    except NecControlError as e:
        return {"connected": False, "error": str(e)}

    _connection = connection
    return {"connected": True, "host": info.host, "port": info.port, "peer": info.peer}


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the TCP session to the display."""
    global _connection
    if _connection is None:
        return {"disconnected": True}
    _connection.close()
    _connection = None
    return {"disconnected": True}


@mcp.tool()
def get_connection_info() -> dict[str, Any]:
    """Report the endpoint of the current session."""
    if _connection is None or not _connection.connected:
        return {"connected": False}
    info = _connection.display_info
    return {"connected": True, "host": info.host, "port": info.port, "peer": info.peer}


# ─── CONTROL TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def set_power(state: str) -> dict[str, Any]:
    """Switch the display on or off.

    Args:
        state: "on" or "off".
    """
    if state not in POWER_STATES:
        return {"error": f"Power state must be one of {sorted(POWER_STATES)}"}

    conn = _get_connection()
    try:
        reply = _set_power(conn, state == "on")
    except NecControlError as e:
        return {"error": str(e)}
    return {"power": state, **_reply_to_dict(reply)}


@mcp.tool()
def set_backlight(level: int) -> dict[str, Any]:
    """Set the backlight level.

    Args:
        level: Backlight level 0-100.
    """
    conn = _get_connection()
    try:
        reply = _set_backlight(conn, level)
    except NecControlError as e:
        return {"error": str(e)}
    return {"backlight": level, **_reply_to_dict(reply)}


@mcp.tool()
def send_command(command: str, value: int) -> dict[str, Any]:
    """Send a known command with a raw parameter value.

    Args:
        command: Command name ("power" or "backlight").
        value: Parameter value 0-65535, sent as four hex characters.
    """
    try:
        code = CommandCode(command)
    except ValueError:
        return {"error": f"Unknown command '{command}'. Valid: {[c.value for c in CommandCode]}"}

    conn = _get_connection()
    try:
        reply = _send_command(conn, code, value)
    except NecControlError as e:
        return {"error": str(e)}
    return {"command": code.value, "value": value, **_reply_to_dict(reply)}


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
