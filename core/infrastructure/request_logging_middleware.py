"""One `request_completed` log line per HTTP call, tagged with a request id."""

import time
import uuid

import structlog
import structlog.contextvars
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger("request")

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = ("/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error("request_failed", duration_ms=_elapsed_ms(started))
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
                client=request.client.host if request.client else None,
            )
            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "method", "path")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)
