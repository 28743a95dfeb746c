"""
ASGI middleware for tracking HTTP request metrics.
Records request count, duration, and errors.
"""
import re
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from app.utils.metrics import http_requests_total, http_request_duration_seconds, errors_total

UUID_RE = re.compile(
    r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}',
    re.IGNORECASE
)
# Generated link ids (uuid4().hex)
HEX_ID_RE = re.compile(r'/[0-9a-f]{32}(?=/|$)', re.IGNORECASE)
NUMERIC_ID_RE = re.compile(r'/\d+(?=/|$)')
# Anything under /api/view/ is a client-supplied id
VIEW_ID_RE = re.compile(r'^(/api/view/).+$')


def normalize_path(path: str) -> str:
    """
    Normalize path to reduce cardinality.
    Replaces UUIDs, generated ids, numeric IDs and view ids with placeholders.
    """
    path = VIEW_ID_RE.sub(r'\1{id}', path)
    path = UUID_RE.sub('{id}', path)
    path = HEX_ID_RE.sub('/{id}', path)
    return NUMERIC_ID_RE.sub('/{id}', path)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to track HTTP metrics for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        """Process request and record metrics."""
        start_time = time.time()

        # Skip metrics endpoint to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        normalized_path = normalize_path(request.url.path)

        try:
            response = await call_next(request)
        except Exception:
            errors_total.labels(error_type="exception").inc()
            raise

        status_code = response.status_code
        http_requests_total.labels(
            method=method,
            path=normalized_path,
            status=status_code
        ).inc()

        http_request_duration_seconds.labels(
            method=method,
            path=normalized_path
        ).observe(time.time() - start_time)

        # Track errors (4xx and 5xx)
        if status_code >= 400:
            errors_total.labels(error_type=f"{status_code // 100}xx").inc()

        return response
