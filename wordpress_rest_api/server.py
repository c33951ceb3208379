"""WordPress REST MCP server entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from .db import open_database
from .services import build_services
from .tools import register_all_tools


@asynccontextmanager
async def app_lifespan(app):
    """Open the database pool and build the services shared by every tool call."""
    async with open_database() as (database, config):
        post_service, page_service = build_services(database, config)
        yield {"post_service": post_service, "page_service": page_service, "config": config}


# Create the MCP server
mcp = FastMCP("wordpress_rest_api", lifespan=app_lifespan)

# Register all tools
register_all_tools(mcp)


def main():
    """Run the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
