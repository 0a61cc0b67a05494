"""Pure ASGI middleware for correlation ID propagation via structlog contextvars.

Binds a correlation id (taken from ``X-Correlation-ID`` or generated) for
every HTTP request, echoes it back on the response and logs request
completion with duration. Unhandled errors are answered here with the 500
envelope, so the correlation id reaches those responses too.
"""

import time
from typing import Any
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

from ordering.api.errors import INTERNAL_ERROR, error_response

logger = structlog.get_logger(__name__)

CORRELATION_HEADER = b"x-correlation-id"


class CorrelationMiddleware:
    """ASGI middleware that binds a correlation id to structlog contextvars."""

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        clear_contextvars()
        correlation_id = _extract_header(scope, CORRELATION_HEADER) or str(uuid4())
        bind_contextvars(
            correlation_id=correlation_id,
            method=scope.get("method", "UNKNOWN"),
            path=scope.get("path", "/"),
        )

        http_status = 500
        response_started = False
        start = time.perf_counter()

        async def _send(message: dict[str, Any]) -> None:
            nonlocal http_status, response_started
            if message.get("type") == "http.response.start":
                response_started = True
                http_status = message.get("status", 500)
                headers = list(message.get("headers", []))
                headers.append((CORRELATION_HEADER, correlation_id.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, _send)
        except Exception:
            if response_started:
                raise
            logger.exception("Unhandled error while processing request")
            await error_response(500, INTERNAL_ERROR)(scope, receive, _send)
        finally:
            logger.info(
                "Request processed",
                http_status=http_status,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )


def _extract_header(scope: dict[str, Any], name: bytes) -> str | None:
    """Extract a header value from ASGI scope (case-insensitive)."""
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None
