"""Access logging keyed by a per-request correlation id."""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from afyaconnect.api.middleware.rate_limiter import client_ip

logger = logging.getLogger("afyaconnect.api")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id, log its outcome and echo the id back.

    A caller-supplied X-Request-ID is kept so a client can correlate its
    own logs with ours.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        logger.info("Request started", extra={**context, "user_ip": client_ip(request)})

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "Request failed",
                extra={**context, "duration_ms": _elapsed_ms(started), "error": str(exc)},
            )
            raise

        logger.info(
            "Request completed",
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(started),
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
