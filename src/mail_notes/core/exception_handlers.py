"""
Exception Handlers

Convert application exceptions to ``{"error": message}`` JSON responses.

Usage:
    app = FastAPI()
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mail_notes.core.exceptions import ApplicationError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_REQUEST_MESSAGE = "Invalid request"


async def application_error_handler(
    request: Request, exc: ApplicationError
) -> JSONResponse:
    """Map ApplicationError subclasses to their status code and message."""
    if exc.status_code >= 500:
        # Cause (the store exception) was already logged with its traceback
        logger.error(
            "Server error on %s %s: %s", request.method, request.url.path, exc.message
        )
    else:
        logger.warning(
            "Client error on %s %s: %s", request.method, request.url.path, exc.message
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Malformed requests (bad JSON, wrongly typed fields) are client faults.

    Returned as 400 rather than FastAPI's default 422 so every client error
    shares the same status and shape.
    """
    logger.warning(
        "Request validation failed on %s %s: %s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    return JSONResponse(status_code=400, content={"error": INVALID_REQUEST_MESSAGE})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, never leak details to the caller."""
    logger.exception(
        "Unhandled exception on %s %s", request.method, request.url.path
    )
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
