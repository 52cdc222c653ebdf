"""Exception hierarchy for NEC display control.

All exceptions inherit from :class:`NecControlError` so callers can catch
every failure of a single invocation with one ``except`` clause::

    NecControlError
    ├── DisplayConnectionError - address resolution or connect failure
    ├── DisplayIOError         - write/read failure, including timeouts
    ├── EncodingError          - value or payload not representable in a frame
    └── ProtocolError          - reply failed validation
        ├── MalformedFrameError
        └── ChecksumMismatchError
"""

from __future__ import annotations


class NecControlError(Exception):
    """Base exception for all NEC display control errors."""


class DisplayConnectionError(NecControlError, ConnectionError):
    """The display could not be reached or the session is not open."""


class DisplayIOError(NecControlError, OSError):
    """Writing to or reading from the display failed."""


class EncodingError(NecControlError, ValueError):
    """A command value or payload cannot be encoded into a frame."""


class ProtocolError(NecControlError):
    """A received byte sequence is not a valid frame."""


class MalformedFrameError(ProtocolError):
    """Frame is truncated or its markers are not where the length says."""


class ChecksumMismatchError(ProtocolError):
    """Block check code of a frame does not match its contents."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"block check mismatch: expected 0x{expected:02X}, "
            f"received 0x{received:02X}"
        )
        self.expected = expected
        self.received = received
