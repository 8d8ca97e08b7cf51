"""
Prometheus instrumentation.

HTTP traffic is recorded by MetricsMiddleware; routers call the record_*
helpers for the domain counters. Everything is exposed at /api/metrics.
"""

import re
import time

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

NAMESPACE = "afyaconnect"
METRICS_PATH = "/api/metrics"

router = APIRouter()

_ID_SEGMENT = re.compile(r"/\d+(?=/|$)")

HTTP_REQUESTS = Counter(
    "http_requests_total",
    "HTTP requests by route and status",
    ["method", "path", "status"],
    namespace=NAMESPACE,
)
HTTP_LATENCY = Histogram(
    "http_request_duration_seconds",
    "Time spent serving HTTP requests",
    ["method", "path"],
    namespace=NAMESPACE,
    buckets=(0.005, 0.025, 0.1, 0.25, 0.5, 1.0, 2.5, 10.0),
)
HTTP_IN_FLIGHT = Gauge(
    "http_requests_in_flight",
    "Requests currently being served",
    namespace=NAMESPACE,
)

# kind: "simple" or "advanced"
HOSPITAL_SEARCHES = Counter(
    "hospital_search_requests_total",
    "Hospital directory searches",
    ["kind"],
    namespace=NAMESPACE,
)
HOSPITAL_SEARCH_HITS = Histogram(
    "hospital_search_results",
    "Hospitals returned per search",
    ["kind"],
    namespace=NAMESPACE,
    buckets=(0, 1, 2, 5, 10, 20, 50, 100),
)
TESTIMONIAL_SUBMISSIONS = Counter(
    "testimonial_submissions_total",
    "Testimonial submissions by outcome",
    ["outcome"],
    namespace=NAMESPACE,
)


def normalize_path(path: str) -> str:
    """Collapse ids and upload names to keep label cardinality bounded."""
    if path.startswith("/uploads/"):
        return "/uploads/*"
    if path.startswith("/api/hospitals/name/"):
        return "/api/hospitals/name/{name}"
    return _ID_SEGMENT.sub("/{id}", path)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        path = normalize_path(request.url.path)
        started = time.perf_counter()
        HTTP_IN_FLIGHT.inc()
        try:
            response = await call_next(request)
        finally:
            HTTP_IN_FLIGHT.dec()

        HTTP_REQUESTS.labels(request.method, path, response.status_code).inc()
        HTTP_LATENCY.labels(request.method, path).observe(time.perf_counter() - started)
        return response


@router.get("/metrics", include_in_schema=False)
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_search(kind: str, result_count: int) -> None:
    HOSPITAL_SEARCHES.labels(kind=kind).inc()
    HOSPITAL_SEARCH_HITS.labels(kind=kind).observe(result_count)


def record_testimonial_submission(accepted: bool) -> None:
    TESTIMONIAL_SUBMISSIONS.labels(outcome="accepted" if accepted else "rejected").inc()
