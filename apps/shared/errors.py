"""
Secure Error Handling

Error taxonomy for the API and the handlers that turn it into JSON responses.
Every error body has the shape {"message": "..."}; internal details are
logged server-side and never sent to the client.
"""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class APIError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(APIError):
    """Missing or malformed request data."""

    status_code = 400


class NotFoundError(APIError):
    status_code = 404


class StoreError(APIError):
    """A call to the backing store failed. The message stays server-side."""

    status_code = 500


def log_and_sanitize_error(error: Exception, context: str) -> str:
    """
    Log full error details server-side and return a correlation id.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "List blog posts")

    Returns:
        Short error id that can be handed to the client for support requests
    """
    # Generate unique error ID for correlation
    error_id = str(uuid.uuid4())[:8]

    # Log full error server-side
    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error,
    )

    return error_id


def _message_response(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return "Request body is not valid JSON"
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return f"Invalid request: {details}"


def register_error_handlers(app: FastAPI) -> None:
    """Install JSON error handlers on a FastAPI app."""

    @app.exception_handler(APIError)
    async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
        if isinstance(exc, StoreError):
            cause = exc.__cause__ or exc
            error_id = log_and_sanitize_error(cause, exc.message)
            return _message_response(
                exc.status_code, GENERIC_ERROR_MESSAGE, headers={"X-Error-ID": error_id}
            )
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        return _message_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unsupported methods on a known path are treated like unknown routes
        if exc.status_code in (404, 405):
            logger.warning(f"No route for {request.method} {request.url.path}")
            return _message_response(404, "Not Found")
        return _message_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _describe_validation_errors(exc)
        logger.warning(f"{request.method} {request.url.path}: {message}")
        return _message_response(400, message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        error_id = log_and_sanitize_error(exc, f"{request.method} {request.url.path}")
        return _message_response(500, GENERIC_ERROR_MESSAGE, headers={"X-Error-ID": error_id})
