"""Reply inspection for frames received from the display.

The content of reply payloads is device specific and not interpreted here;
a reply is accepted once it passes structural and checksum validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .framing import Frame, MessageType

REPLY_TYPES = MappingProxyType({
    MessageType.COMMAND: MessageType.COMMAND_REPLY,
    MessageType.GET_PARAMETER: MessageType.GET_PARAMETER_REPLY,
    MessageType.SET_PARAMETER: MessageType.SET_PARAMETER_REPLY,
})


@dataclass(frozen=True)
class Reply:
    """A validated reply paired with the type of request that caused it."""

    request_type: MessageType
    frame: Frame

    @property
    def matches_request(self) -> bool:
        return self.frame.message_type == expected_reply_type(self.request_type)

    def __repr__(self) -> str:
        return f"Reply(request_type={self.request_type.name}, frame={self.frame!r})"


def expected_reply_type(message_type: MessageType) -> MessageType:
    """Return the reply type a request of ``message_type`` is answered with."""
    try:
        return REPLY_TYPES[MessageType(message_type)]
    except (KeyError, ValueError):
        raise ValueError(f"No reply type for message type {message_type!r}") from None


def parse_reply(frame: Frame, request_type: MessageType) -> Reply:
    """Pair a validated frame with the request it answers."""
    return Reply(request_type=MessageType(request_type), frame=frame)


def format_hex(data: bytes) -> str:
    """Render bytes as space separated lowercase hex pairs."""
    return data.hex(" ")
