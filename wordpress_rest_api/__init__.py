"""WordPress REST API server.

A read-only, WordPress-compatible REST API (posts and pages) served
straight from a WordPress MySQL/MariaDB database, plus an MCP server
exposing the same operations as tools.
"""

from .server import main, mcp

__all__ = ["mcp", "main"]
__version__ = "0.1.0"
