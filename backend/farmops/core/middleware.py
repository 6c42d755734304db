# backend/farmops/core/middleware.py

import time
import uuid

from farmops.core.logger import logger

REQUEST_ID_HEADER = b"x-request-id"


def generate_request_id() -> str:
    return str(uuid.uuid4())


def _incoming_request_id(scope) -> str:
    # n8n and the gateway forward their own id; keep it so logs line up
    for name, value in scope.get("headers", []):
        if name == REQUEST_ID_HEADER and value:
            return value.decode("latin-1")[:64]
    return generate_request_id()


class RequestLoggingMiddleware:
    """
    Tags every HTTP request with an id (scope["request_id"] and the
    X-Request-ID response header) and logs start, status and duration.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request_id = _incoming_request_id(scope)
        scope["request_id"] = request_id
        method, path = scope.get("method", ""), scope.get("path", "")

        start = time.perf_counter()
        logger.info("Incoming request", extra={"request_id": request_id, "method": method, "path": path})

        seen = {"status": None}

        async def send_with_id(message):
            if message["type"] == "http.response.start":
                seen["status"] = message.get("status", 0)
                headers = [h for h in message.get("headers", []) if h[0].lower() != REQUEST_ID_HEADER]
                message["headers"] = headers + [(REQUEST_ID_HEADER, request_id.encode("latin-1"))]
            await send(message)

        await self.app(scope, receive, send_with_id)

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "status_code": seen["status"],
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )


class ExceptionLoggingMiddleware:
    """Logs anything that escapes the exception handlers, then re-raises."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        try:
            await self.app(scope, receive, send)
        except Exception as exc:
            logger.exception(
                "Unhandled exception in request",
                extra={
                    "request_id": scope.get("request_id"),
                    "method": scope.get("method"),
                    "path": scope.get("path"),
                    "error_type": type(exc).__name__,
                },
            )
            raise
