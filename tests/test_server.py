"""Tests for the MCP server tools."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

from nec_display_mcp.errors import DisplayConnectionError, DisplayIOError, EncodingError
from nec_display_mcp.protocol.framing import Frame, MessageType
from nec_display_mcp.protocol.parser import Reply


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
        # Remove cached server module so it re-imports with our mock
        sys.modules.pop("nec_display_mcp.server", None)
        import nec_display_mcp.server as server_mod

    return server_mod


def _reply(request_type: MessageType, reply_type: MessageType) -> Reply:
    return Reply(request_type=request_type, frame=Frame(message_type=reply_type, payload=b"00"))


def test_set_power_rejects_unknown_state():
    server = _get_server_module()
    result = server.set_power("standby")
    assert "error" in result


def test_set_power_returns_reply():
    server = _get_server_module()
    mock_conn = MagicMock()
    reply = _reply(MessageType.COMMAND, MessageType.COMMAND_REPLY)

    with patch.object(server, "_get_connection", return_value=mock_conn), \
            patch.object(server, "_set_power", return_value=reply) as set_power:
        result = server.set_power("off")

    set_power.assert_called_once_with(mock_conn, False)
    assert result == {
        "power": "off",
        "reply_type": "B",
        "payload": "00",
        "matches_request": True,
    }


def test_set_backlight_out_of_range_is_reported():
    server = _get_server_module()
    mock_conn = MagicMock()

    with patch.object(server, "_get_connection", return_value=mock_conn), \
            patch.object(server, "_set_backlight", side_effect=EncodingError("Backlight must be 0-100, got 120")):
        result = server.set_backlight(120)

    assert result == {"error": "Backlight must be 0-100, got 120"}


def test_send_command_unknown_command():
    server = _get_server_module()
    result = server.send_command("volume", 10)
    assert "Unknown command" in result["error"]


def test_send_command_io_error():
    server = _get_server_module()
    mock_conn = MagicMock()

    with patch.object(server, "_get_connection", return_value=mock_conn), \
            patch.object(server, "_send_command", side_effect=DisplayIOError("timed out waiting for reply")):
        result = server.send_command("backlight", 10)

    assert result == {"error": "timed out waiting for reply"}


def test_connect_failure_keeps_disconnected():
    server = _get_server_module()
    mock_conn = MagicMock()
    mock_conn.open.side_effect = DisplayConnectionError("cannot connect to monitor")

    with patch.object(server, "TCPConnection", return_value=mock_conn) as conn_cls:
        result = server.connect("10.0.0.5")

    conn_cls.assert_called_once_with("10.0.0.5", 7142, 2.0)
    assert result == {"connected": False, "error": "cannot connect to monitor"}
    assert server.get_connection_info() == {"connected": False}


def test_connect_and_disconnect():
    server = _get_server_module()
    mock_conn = MagicMock()
    mock_conn.open.return_value = MagicMock(host="10.0.0.5", port=7142, peer="10.0.0.5:7142")

    with patch.object(server, "TCPConnection", return_value=mock_conn):
        result = server.connect("10.0.0.5", 7142)

    assert result["connected"] is True
    assert result["peer"] == "10.0.0.5:7142"

    assert server.disconnect() == {"disconnected": True}
    mock_conn.close.assert_called_once()
    assert server.get_connection_info() == {"connected": False}


def test_connect_invalid_env_config(monkeypatch):
    server = _get_server_module()
    monkeypatch.setenv("NEC_DISPLAY_PORT", "abc")

    with patch.object(server, "TCPConnection") as conn_cls:
        result = server.connect("10.0.0.5")

    conn_cls.assert_not_called()
    assert result["connected"] is False
    assert "Invalid environment configuration" in result["error"]
