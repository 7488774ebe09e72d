"""crossfs: cross-platform filesystem and shell tools over MCP."""

__version__ = "0.1.0"
