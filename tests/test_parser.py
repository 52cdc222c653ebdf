"""Tests for reply inspection."""

import pytest

from nec_display_mcp.protocol.framing import Frame, MessageType
from nec_display_mcp.protocol.parser import (
    expected_reply_type,
    format_hex,
    parse_reply,
)


def test_expected_reply_types():
    assert expected_reply_type(MessageType.COMMAND) == MessageType.COMMAND_REPLY
    assert expected_reply_type(MessageType.GET_PARAMETER) == MessageType.GET_PARAMETER_REPLY
    assert expected_reply_type(MessageType.SET_PARAMETER) == MessageType.SET_PARAMETER_REPLY


def test_reply_types_have_no_reply():
    with pytest.raises(ValueError):
        expected_reply_type(MessageType.COMMAND_REPLY)
    with pytest.raises(ValueError):
        expected_reply_type(0x5A)


def test_parse_reply_matches_request():
    frame = Frame(message_type=MessageType.COMMAND_REPLY, payload=b"00C203D60001")
    reply = parse_reply(frame, MessageType.COMMAND)
    assert reply.matches_request
    assert reply.frame is frame


def test_parse_reply_mismatch():
    frame = Frame(message_type=MessageType.GET_PARAMETER_REPLY, payload=b"00")
    reply = parse_reply(frame, MessageType.SET_PARAMETER)
    assert not reply.matches_request
    assert "SET_PARAMETER" in repr(reply)


def test_format_hex():
    assert format_hex(b"\x01\x30\x41\x0d") == "01 30 41 0d"
    assert format_hex(b"") == ""
