"""
AfyaConnect HTTP application.

Wires the routers, middleware stack and error rendering together. Every
error leaves the service as ``{"error": "..."}``, with a ``fields`` map
added when specific inputs were rejected.
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from afyaconnect.api.metrics import MetricsMiddleware
from afyaconnect.api.metrics import router as metrics_router
from afyaconnect.api.middleware.rate_limiter import limiter, rate_limit_exceeded_handler
from afyaconnect.api.middleware.request_logging import RequestLoggingMiddleware
from afyaconnect.api.routers import (
    admin,
    auth,
    chat,
    hospitals,
    inquiries,
    statistics,
    system,
    testimonials,
)
from afyaconnect.core.config import settings
from afyaconnect.core.errors import AfyaConnectError
from afyaconnect.core.logging_config import configure_logging
from afyaconnect.db import ensure_db
from afyaconnect.models.common import ErrorResponse

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    for directory in (os.path.dirname(settings.DB_PATH), settings.UPLOAD_DIR):
        if directory:
            os.makedirs(directory, exist_ok=True)
    seeded = ensure_db(settings.DB_PATH)
    logger.info(
        f"{settings.APP_NAME} ready ({settings.ENVIRONMENT.value}, {seeded} hospitals seeded)"
    )
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Hospital directory, patient testimonials and inquiries for medical travellers.",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "hospitals", "description": "Hospital listing, search and ratings"},
        {"name": "testimonials", "description": "Patient success stories"},
        {"name": "inquiries", "description": "Patient contact requests"},
        {"name": "assistant", "description": "Scripted chat and treatment suggestions"},
        {"name": "auth", "description": "Registration and login"},
        {"name": "admin", "description": "Testimonial moderation"},
        {"name": "system", "description": "Health checks and statistics"},
    ],
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Last registered is outermost: CORS wraps everything, security headers sit
# closest to the routes
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS or ["*"],
    allow_credentials=bool(settings.CORS_ORIGINS),
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)


def _error_response(status_code: int, message: str, fields: dict | None = None):
    body = ErrorResponse(error=message, fields=fields or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(AfyaConnectError)
async def domain_error_handler(request: Request, exc: AfyaConnectError):
    return _error_response(exc.status_code, exc.message, getattr(exc, "fields", None))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400, naming every offending field."""
    fields: dict[str, str] = {}
    missing: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        name = loc[-1] if loc and error.get("type") != "json_invalid" else "body"
        if error.get("type") == "missing":
            missing.append(name)
            fields.setdefault(name, f"{name} is required")
        else:
            fields.setdefault(name, error.get("msg", "Invalid value"))

    invalid = [name for name in fields if name not in missing]
    parts = []
    if missing:
        parts.append(f"Missing required field(s): {', '.join(missing)}")
    if invalid:
        parts.append(f"Invalid field(s): {', '.join(invalid)}")
    return _error_response(400, "; ".join(parts) or "Invalid request", fields)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = "Not found"
    return _error_response(exc.status_code, message)


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    """Log the failure; the client only sees the detail in debug mode."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    message = "Internal server error"
    if settings.DEBUG:
        message = f"{message}: {exc}"
    return _error_response(500, message)


# Testimonial before/after images
app.mount(
    "/uploads",
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)

app.include_router(system.router, tags=["system"])
app.include_router(hospitals.router, prefix="/api", tags=["hospitals"])
app.include_router(testimonials.router, prefix="/api", tags=["testimonials"])
app.include_router(inquiries.router, prefix="/api", tags=["inquiries"])
app.include_router(statistics.router, prefix="/api", tags=["system"])
app.include_router(chat.router, prefix="/api", tags=["assistant"])
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(admin.router, prefix="/api", tags=["admin"])
app.include_router(metrics_router, prefix="/api")


if __name__ == "__main__":
    uvicorn.run(
        "afyaconnect.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
