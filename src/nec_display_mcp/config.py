"""
Connection configuration.

Values come from the defaults below, optionally overridden by environment
variables:

- ``NEC_DISPLAY_HOST``: display address
- ``NEC_DISPLAY_PORT``: TCP port (default 7142)
- ``NEC_DISPLAY_TIMEOUT``: reply timeout in seconds (default 2)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .transport.tcp_connection import DEFAULT_PORT, READ_TIMEOUT_S

DEFAULT_HOST = "10.0.0.240"


@dataclass
class DisplayConfig:
    """
    Where and how to reach the display.

    Attributes:
        host: Display hostname or IP address
        port: External control TCP port
        timeout: Seconds to wait for connect and for each reply
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = READ_TIMEOUT_S

    @classmethod
    def from_env(cls) -> "DisplayConfig":
        """
        Create a DisplayConfig from environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        config = cls()
        env = os.environ
        if env.get("NEC_DISPLAY_HOST"):
            config.host = env["NEC_DISPLAY_HOST"]
        if env.get("NEC_DISPLAY_PORT"):
            config.port = int(env["NEC_DISPLAY_PORT"])
        if env.get("NEC_DISPLAY_TIMEOUT"):
            config.timeout = float(env["NEC_DISPLAY_TIMEOUT"])
        return config
