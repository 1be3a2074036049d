"""Request ID + access log middleware.

Learn: Each request is tagged with an ID, taken from an incoming
X-Request-ID header when present, otherwise a fresh UUID. The ID is
bound into structlog contextvars so every log line emitted while the
request is handled carries it, and it is echoed back to the client.
One `http.request` line is logged per request with status and timing,
including requests whose handler raised (logged as status 500).
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log its outcome."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        status = 500
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            status = response.status_code
        finally:
            logger.info(
                "http.request",
                method=request.method,
                path=request.url.path,
                status=status,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
