"""Prometheus metrics for validation calls and the HTTP adapter."""
import time
from typing import Callable

from prometheus_client import Counter, Gauge, Histogram, generate_latest
from prometheus_client import CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from auction_validator.core.config import settings


# =============================================================================
# Prometheus Metrics Definitions
# =============================================================================

# Request metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
)

# Validation metrics
VALIDATION_REQUEST_COUNT = Counter(
    "auction_validation_requests_total",
    "Validation HTTP requests by outcome",
    ["endpoint", "outcome"],  # decided, unparseable, error
)

VALIDATION_COUNT = Counter(
    "auction_validations_total",
    "Total validation calls",
    ["action", "verdict"],  # accepted, rejected
)

REJECTION_COUNT = Counter(
    "auction_rejections_total",
    "Rejected transactions by reason",
    ["reason"],
)

VALIDATION_LATENCY = Histogram(
    "auction_validation_duration_seconds",
    "Validation latency in seconds",
    ["action"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1],
)


# =============================================================================
# Metrics Middleware
# =============================================================================

class PrometheusMiddleware(BaseHTTPMiddleware):
    """Collects request metrics and classifies validation requests.

    A validation request either reaches a verdict (HTTP 200, accepted or
    rejected), carries a body that is not a validation request at all
    (HTTP 422), or fails inside the service.
    """

    VALIDATION_PATHS = ("/api/v1/validate/raw", "/api/v1/validate")
    KNOWN_PATHS = VALIDATION_PATHS + ("/api/v1/blueprint", "/health")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        ACTIVE_REQUESTS.inc()
        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            ACTIVE_REQUESTS.dec()
            self._record(request, status_code, time.perf_counter() - start_time)

    def _record(self, request: Request, status_code: int, latency: float) -> None:
        endpoint = self._endpoint_label(request.url.path)
        REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status=status_code).inc()
        REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(latency)

        if endpoint in self.VALIDATION_PATHS and request.method == "POST":
            VALIDATION_REQUEST_COUNT.labels(
                endpoint=endpoint, outcome=self._validation_outcome(status_code)
            ).inc()

    @staticmethod
    def _validation_outcome(status_code: int) -> str:
        if status_code == 200:
            return "decided"
        if status_code == 422:
            return "unparseable"
        return "error"

    @classmethod
    def _endpoint_label(cls, path: str) -> str:
        """Map a path to a bounded label set."""
        normalized = path.rstrip("/") or "/"
        return normalized if normalized in cls.KNOWN_PATHS else "/other"


# =============================================================================
# Metrics Endpoint
# =============================================================================

async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics scrape endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


# =============================================================================
# Helper Functions for Manual Metric Recording
# =============================================================================

def record_verdict(action: str, accepted: bool, reason: str | None, duration: float) -> None:
    """Record one validation outcome."""
    if not settings.METRICS_ENABLED:
        return
    VALIDATION_COUNT.labels(action=action, verdict="accepted" if accepted else "rejected").inc()
    VALIDATION_LATENCY.labels(action=action).observe(duration)
    if reason is not None:
        REJECTION_COUNT.labels(reason=reason).inc()
