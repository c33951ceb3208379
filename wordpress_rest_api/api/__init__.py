"""HTTP transport: a FastAPI application serving the WordPress REST routes."""

from .app import create_app, main

__all__ = ["create_app", "main"]
