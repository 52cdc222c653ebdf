"""Transport layer: TCP session to the display."""

from .tcp_connection import DisplayInfo, TCPConnection
