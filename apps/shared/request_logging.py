"""Access logging in Apache "common" log format."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import Response

logger = logging.getLogger(__name__)


def format_common_log(request: Request, status_code: int, length: str, when: datetime) -> str:
    host = request.client.host if request.client else "-"
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    http_version = request.scope.get("http_version", "1.1")
    timestamp = when.strftime("%d/%b/%Y:%H:%M:%S %z")
    return (
        f'{host} - - [{timestamp}] "{request.method} {path} HTTP/{http_version}" '
        f"{status_code} {length}"
    )


def setup_request_logging(app: FastAPI) -> None:
    """Log one line per request, including requests that end in an unhandled error."""

    @app.middleware("http")
    async def log_request(request: Request, call_next) -> Response:
        try:
            response = await call_next(request)
        except Exception:
            # The 500 itself is produced by the outer server error handler
            logger.info(format_common_log(request, 500, "-", datetime.now(timezone.utc)))
            raise
        length = response.headers.get("content-length", "-")
        logger.info(
            format_common_log(request, response.status_code, length, datetime.now(timezone.utc))
        )
        return response
