"""
Route guard and handler - turn unexpected failures into 500 responses.

HTTPExceptions pass through untouched. Anything else is logged and answered
with its message; company routes also send the stack trace while
`expose_error_traces` is enabled.
"""

import functools
import logging
import traceback
from fastapi import HTTPException, Request
from fastapi.exceptions import ResponseValidationError
from fastapi.responses import JSONResponse

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def internal_error_response(exc: Exception, detailed: bool) -> JSONResponse:
    """Build the 500 body: `{"message", "stack"}` or just the message string."""
    if not detailed:
        return JSONResponse(status_code=500, content=str(exc))
    content = {"message": str(exc)}
    if get_settings().expose_error_traces:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=content)


def guard(detailed: bool = False):
    """Decorator for async route handlers."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                logger.exception("Unhandled error in %s", func.__name__)
                return internal_error_response(exc, detailed)
        return wrapper
    return decorator


async def response_validation_handler(request: Request, exc: ResponseValidationError) -> JSONResponse:
    """
    A stored document that no longer fits its response model.
    Raised after the route returns, so `guard` never sees it.
    """
    logger.error("Response validation failed for %s: %s", request.url.path, exc.errors())
    detailed = request.url.path.startswith(f"{get_settings().api_prefix}/companies")
    return internal_error_response(exc, detailed)
