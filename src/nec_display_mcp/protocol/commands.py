"""Command descriptors and high-level command builders.

Each logical command maps to a message type and a fixed code prefix taken
from the display's external control documentation. The value is appended
to the prefix as four hex characters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from ..errors import EncodingError
from .framing import MessageType, encode

POWER_ON = 1
POWER_OFF = 4
BACKLIGHT_MIN = 0
BACKLIGHT_MAX = 100


class CommandCode(Enum):
    """Logical commands supported by the controller."""

    POWER = "power"
    BACKLIGHT = "backlight"


@dataclass(frozen=True)
class CommandDescriptor:
    """Message type and payload prefix identifying a command."""

    message_type: MessageType
    prefix: bytes


COMMANDS = MappingProxyType({
    CommandCode.POWER: CommandDescriptor(MessageType.COMMAND, b"C203D6"),
    CommandCode.BACKLIGHT: CommandDescriptor(MessageType.SET_PARAMETER, b"0010"),
})

POWER_STATES: dict[str, int] = {
    "on": POWER_ON,
    "off": POWER_OFF,
}


def build_command(code: CommandCode, value: int) -> bytes:
    """Build the frame for a command from the descriptor table."""
    return encode(COMMANDS[code], value)


def build_power(on: bool) -> bytes:
    """Build a power control command."""
    return build_command(CommandCode.POWER, POWER_ON if on else POWER_OFF)


def build_set_power(state: str) -> bytes:
    """Build a power control command from ``"on"`` or ``"off"``."""
    if state not in POWER_STATES:
        raise ValueError(f"Power state must be one of {list(POWER_STATES)}, got {state!r}")
    return build_command(CommandCode.POWER, POWER_STATES[state])


def build_set_backlight(level: int) -> bytes:
    """Build a backlight set-parameter command.

    Args:
        level: Backlight level 0-100.
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise EncodingError(f"Backlight must be an integer, got {level!r}")
    if not BACKLIGHT_MIN <= level <= BACKLIGHT_MAX:
        raise EncodingError(
            f"Backlight must be {BACKLIGHT_MIN}-{BACKLIGHT_MAX}, got {level}"
        )
    return build_command(CommandCode.BACKLIGHT, level)
