"""TCP server and client exchanging a name and a number over a line-based protocol."""

__version__ = "0.1.0"