"""
Per-client request limits.

Clients are keyed by their proxy-reported address so that every patient
behind the load balancer does not share one bucket.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from afyaconnect.core.config import settings

BROWSE_LIMIT = "100/minute"
RATING_LIMIT = "30/minute"
ASSISTANT_LIMIT = "30/minute"
INQUIRY_LIMIT = "20/minute"
ACCOUNT_LIMIT = "10/minute"
SUBMISSION_LIMIT = "10/minute"


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


limiter = Limiter(key_func=client_ip, enabled=settings.RATE_LIMIT_ENABLED)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests from this IP, please try again later.",
            "limit": str(exc.detail),
        },
    )
