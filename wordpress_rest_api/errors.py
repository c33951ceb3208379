"""Error types raised by repositories, services and the transport layer."""

from __future__ import annotations


class WordPressAPIError(Exception):
    """Base class for all errors raised by this package."""


class NotFound(WordPressAPIError):
    """A single-row lookup returned no row."""


class InvalidParameter(WordPressAPIError):
    """A request parameter (or combination of parameters) is not valid."""

    def __init__(self, param: str, message: str):
        super().__init__(message)
        self.param = param
        self.message = message


class QueryError(WordPressAPIError):
    """The database rejected or failed to run a query."""


class DecodeError(WordPressAPIError):
    """A PHP-serialized value stored in the database could not be decoded."""


class InvalidID(WordPressAPIError):
    """The requested content item does not exist."""


class InvalidRoute(WordPressAPIError):
    """No route matches the URL and request method."""
