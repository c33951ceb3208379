"""FastAPI application factory and the ``wordpress-rest-api`` entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import API_PATH, API_VERSION, LISTEN_HOST, LISTEN_PORT, logger
from ..db import open_database
from ..errors import WordPressAPIError
from ..services import build_services
from .errors import api_exception_handler, http_exception_handler
from .routes import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool for the lifetime of the application."""
    async with open_database() as (database, config):
        app.state.post_service, app.state.page_service = build_services(database, config)
        logger.info("Serving REST API at %s", config.api_base_url)
        yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="WordPress REST API",
        description="Read-only WordPress REST API served from the WordPress database.",
        lifespan=lifespan,
    )
    app.include_router(router, prefix=f"/{API_PATH}/{API_VERSION}")

    app.add_exception_handler(WordPressAPIError, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, api_exception_handler)
    return app


def main():
    """Run the HTTP server."""
    uvicorn.run(create_app(), host=LISTEN_HOST, port=LISTEN_PORT)


if __name__ == "__main__":
    main()
