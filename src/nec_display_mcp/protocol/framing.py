"""Message frame builder and validator for the NEC external control protocol.

Frame layout::

    +-----+----------+------+--------+------+---------+-----+---------+-----+-----+----+
    | SOH | Reserved | Dest | Source | Type | Length  | STX | Payload | ETX | BCC | CR |
    | 01  |   '0'    | 'A'  |  '0'   | 1 B  | 2 chars | 02  |  var.   | 03  | 1 B | 0D |
    +-----+----------+------+--------+------+---------+-----+---------+-----+-----+----+

- Length: two ASCII hex digits counting STX, payload and ETX
- Payload: command code characters followed by a 4-digit hex value
- BCC: XOR of every byte from Reserved through ETX (SOH excluded)
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import IntEnum
from functools import reduce
from operator import xor

from ..errors import ChecksumMismatchError, EncodingError, MalformedFrameError

SOH = 0x01
RESERVED = 0x30
DESTINATION_MONITOR = 0x41  # 'A' == monitor ID 1
SOURCE_CONTROLLER = 0x30  # controller is always '0'
STX = 0x02
ETX = 0x03
DELIMITER = 0x0D

HEADER_SIZE = 8  # SOH + reserved + dest + source + type + length(2) + STX
MIN_FRAME_SIZE = 9  # SOH .. STX, ETX, BCC, CR with a declared length of 0
MAX_SHORT_LENGTH = 15
VALUE_DIGITS = 4
MAX_VALUE = 0xFFFF

_HEX_DIGITS = frozenset(string.hexdigits.encode("ascii"))


class MessageType(IntEnum):
    """Message type byte (case sensitive)."""

    COMMAND = ord("A")
    COMMAND_REPLY = ord("B")
    GET_PARAMETER = ord("C")
    GET_PARAMETER_REPLY = ord("D")
    SET_PARAMETER = ord("E")
    SET_PARAMETER_REPLY = ord("F")


@dataclass(frozen=True)
class Frame:
    """A validated protocol frame."""

    message_type: int
    payload: bytes
    destination: int = DESTINATION_MONITOR
    source: int = SOURCE_CONTROLLER

    def __repr__(self) -> str:
        return (
            f"Frame(message_type={chr(self.message_type)!r}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def encode_length(length: int) -> bytes:
    """Encode a message length into the two-character length field.

    The leading character is always ``'0'``. Lengths above 9 are shifted by
    the ASCII distance between ``'9'`` and ``'A'`` so the second character
    stays a hex digit.

    Raises:
        EncodingError: If ``length`` is outside 0-15.
    """
    if not 0 <= length <= MAX_SHORT_LENGTH:
        raise EncodingError(f"payload too large: length {length} exceeds 0x0F")
    if length > 9:
        length += 7
    return bytes([0x30, 0x30 + length])


def decode_length(field: bytes) -> int:
    """Decode a two-character hex length field."""
    if len(field) != 2 or not all(b in _HEX_DIGITS for b in field):
        raise MalformedFrameError(f"invalid length field {field!r}")
    return int(field.decode("ascii"), 16)


def block_check(data: bytes) -> int:
    """XOR all bytes of ``data`` together."""
    return reduce(xor, data, 0)


def encode_value(value: int) -> bytes:
    """Encode an integer parameter as four uppercase ASCII hex digits.

    Raises:
        EncodingError: If ``value`` is not an integer in 0-65535.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"value must be an integer, got {value!r}")
    if not 0 <= value <= MAX_VALUE:
        raise EncodingError(f"value must be 0-{MAX_VALUE}, got {value}")
    return f"{value:04X}".encode("ascii")


def build_frame(message_type: int, payload: bytes = b"") -> bytes:
    """Build a complete frame around ``payload``.

    Args:
        message_type: Message type byte, usually a :class:`MessageType`.
        payload: Bytes placed between STX and ETX.

    Returns:
        The frame ready to be written to the socket.

    Raises:
        EncodingError: If the message type is not a single byte or the
            payload does not fit the length field.
    """
    if isinstance(message_type, bool) or not isinstance(message_type, int):
        raise EncodingError(f"message type must be an integer, got {message_type!r}")
    if not 0 <= message_type <= 0xFF:
        raise EncodingError(f"message type must be 0-255, got {message_type}")
    length = encode_length(len(payload) + 2)
    body = (
        bytes([RESERVED, DESTINATION_MONITOR, SOURCE_CONTROLLER, message_type])
        + length
        + bytes([STX])
        + payload
        + bytes([ETX])
    )
    return bytes([SOH]) + body + bytes([block_check(body), DELIMITER])


def encode(descriptor, value: int) -> bytes:
    """Encode a command descriptor and its integer parameter into a frame.

    Args:
        descriptor: Object with ``message_type`` and ``prefix`` attributes,
            see :class:`~nec_display_mcp.protocol.commands.CommandDescriptor`.
        value: Parameter value 0-65535.
    """
    payload = bytes(descriptor.prefix) + encode_value(value)
    return build_frame(descriptor.message_type, payload)


def parse_frame(data: bytes) -> Frame:
    """Validate a received byte sequence and extract its contents.

    Args:
        data: Raw bytes read from the display, one frame up to and
            including the CR delimiter.

    Returns:
        The validated ``Frame``.

    Raises:
        MalformedFrameError: If the buffer is truncated or a marker byte is
            not at the position implied by the declared length.
        ChecksumMismatchError: If the block check code does not match.
    """
    if len(data) < MIN_FRAME_SIZE:
        raise MalformedFrameError(
            f"frame too short: {len(data)} bytes, need at least {MIN_FRAME_SIZE}"
        )
    if data[0] != SOH:
        raise MalformedFrameError(f"missing SOH, got 0x{data[0]:02X}")
    if data[7] != STX:
        raise MalformedFrameError(f"missing STX, got 0x{data[7]:02X}")

    length = decode_length(data[5:7])
    if length < 2:
        raise MalformedFrameError(f"declared length {length} cannot hold STX/ETX")
    etx_index = 6 + length
    if len(data) != etx_index + 3:
        raise MalformedFrameError(
            f"frame is {len(data)} bytes but length field declares {etx_index + 3}"
        )
    if data[etx_index] != ETX:
        raise MalformedFrameError(f"missing ETX at offset {etx_index}")
    if data[-1] != DELIMITER:
        raise MalformedFrameError(f"missing delimiter, got 0x{data[-1]:02X}")

    expected = block_check(data[1 : etx_index + 1])
    received = data[etx_index + 1]
    if expected != received:
        raise ChecksumMismatchError(expected, received)

    return Frame(
        message_type=data[4],
        payload=bytes(data[8:etx_index]),
        destination=data[2],
        source=data[3],
    )
