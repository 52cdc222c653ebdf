"""Control client and MCP server for NEC-protocol displays."""

__version__ = "0.1.0"
