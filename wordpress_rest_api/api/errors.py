"""WordPress REST error envelopes and the exception handlers that emit them."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import logger
from ..errors import InvalidID, InvalidParameter, InvalidRoute


class ErrorData(BaseModel):
    status: int
    replies: dict[str, str] | None = None


class ErrorEnvelope(BaseModel):
    """``{"code": ..., "message": ..., "data": {"status": ..., "replies"?: ...}}``"""

    code: str
    message: str
    data: ErrorData


def error_envelope(exc: BaseException) -> ErrorEnvelope:
    """Map an exception to its REST error envelope.

    Anything that is not a known client error becomes a generic 400 so no
    internal detail reaches the client.
    """
    if isinstance(exc, InvalidID):
        return ErrorEnvelope(
            code="rest_post_invalid_id",
            message="Invalid post ID.",
            data=ErrorData(status=404),
        )
    if isinstance(exc, InvalidRoute):
        return ErrorEnvelope(
            code="rest_no_route",
            message="No route was found matching the URL and request method.",
            data=ErrorData(status=404),
        )
    if isinstance(exc, InvalidParameter):
        return ErrorEnvelope(
            code="rest_invalid_param",
            message=f"Invalid parameter(s): {exc.param}",
            data=ErrorData(status=400, replies={exc.param: exc.message}),
        )

    logger.error("Request failed: %s: %s", type(exc).__name__, exc)
    return ErrorEnvelope(
        code="rest_invalid_param",
        message="Invalid parameter(s).",
        data=ErrorData(status=400),
    )


def error_response(exc: BaseException) -> JSONResponse:
    envelope = error_envelope(exc)
    return JSONResponse(
        status_code=envelope.data.status,
        content=envelope.model_dump(exclude_none=True),
    )


async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render errors raised by services and request decoding."""
    return error_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched paths and methods use the ``rest_no_route`` envelope."""
    if exc.status_code in (404, 405):
        return error_response(InvalidRoute(request.url.path))
    return error_response(exc)
