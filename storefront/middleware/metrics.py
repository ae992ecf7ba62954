"""Prometheus request metrics."""

import time

from fastapi import Request, Response
from prometheus_client import Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from storefront.core.events import REQUESTS_TOTAL, RESPONSES_TOTAL
from storefront.core.logging import get_logger

logger = get_logger()

REQUEST_DURATION = Histogram(
    "storefront_http_request_duration_seconds",
    "Time spent handling a request",
    ["method", "path"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)


def route_label(request: Request) -> str:
    """Label a request by its route template.

    Catch-all page URLs are unbounded; unmatched requests fall back to the
    path without a trailing slash.
    """
    path_format = getattr(request.scope.get("route"), "path_format", None)
    if path_format:
        return str(path_format)
    return request.url.path.rstrip("/") or "/"


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Count requests per route template and responses per status code.

    Durations go to ``storefront_http_request_duration_seconds``.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        elapsed = time.perf_counter() - started
        label = route_label(request)
        REQUESTS_TOTAL.labels(method=request.method, path=label).inc()
        RESPONSES_TOTAL.labels(status_code=str(response.status_code)).inc()
        REQUEST_DURATION.labels(method=request.method, path=label).observe(elapsed)

        logger.info(
            "request_processed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration=round(elapsed, 4),
        )
        return response
