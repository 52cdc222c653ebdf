"""Protocol layer: message framing, block check, command builders, and reply inspection."""

from .framing import Frame, MessageType, build_frame, encode, parse_frame
from .commands import COMMANDS, CommandCode, CommandDescriptor, build_command
