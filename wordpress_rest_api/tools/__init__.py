"""MCP tools exposing the read-only REST operations."""

from .content import register_content_tools

__all__ = ["register_content_tools"]


def register_all_tools(mcp):
    """Register all tools with the MCP server."""
    register_content_tools(mcp)
