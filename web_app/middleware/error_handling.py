"""
Exception handlers for consistent error responses.

Every error response is {"error": <message>}; stack traces stay in the logs.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink.errors import ShortLinkError
from shortlink.common.logging_config import get_logger

logger = get_logger("web")


async def shortlink_error_handler(request: Request, exc: ShortLinkError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"Error in {request.method} {request.url.path}: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{exc.status_code} for {request.method} {request.url.path}: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Invalid request body for {request.url.path}: {exc.errors()}")
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error in {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on app."""
    app.add_exception_handler(ShortLinkError, shortlink_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
