"""
Prometheus metrics middleware for Booth Leads API.

Exposes /metrics endpoint with request counters, latency histograms,
and custom business metrics.
"""

import logging
import time

from fastapi import Request, Response
from prometheus_client import (
    Counter, Histogram, Gauge,
    generate_latest, CONTENT_TYPE_LATEST,
)
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Request metrics
REQUEST_COUNT = Counter(
    "booth_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "booth_http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
ACTIVE_REQUESTS = Gauge(
    "booth_http_active_requests",
    "Currently active HTTP requests",
)

# Business metrics
LEAD_SCORE_HIST = Histogram(
    "booth_lead_score",
    "Lead score distribution",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)
LEAD_ENGAGEMENT_COUNT = Counter(
    "booth_leads_captured_total",
    "Leads captured by engagement tier",
    ["engagement_level"],
)
CRM_SYNC_COUNT = Counter(
    "booth_crm_sync_leads_total",
    "Leads pushed to the CRM",
    ["platform", "outcome"],
)
INSIGHT_COUNT = Counter(
    "booth_insights_total",
    "Generated lead insights",
    ["source"],
)


def record_lead_score(score: float, engagement_level: str):
    """Record a captured lead's score."""
    LEAD_SCORE_HIST.observe(score)
    LEAD_ENGAGEMENT_COUNT.labels(engagement_level=engagement_level).inc()


def record_crm_sync(platform: str, synced: int, failed: int):
    """Record a CRM sync run."""
    CRM_SYNC_COUNT.labels(platform=platform, outcome="synced").inc(synced)
    CRM_SYNC_COUNT.labels(platform=platform, outcome="failed").inc(failed)


def record_insight(source: str):
    """Record an insight and whether it came from the LLM or the fallback."""
    INSIGHT_COUNT.labels(source=source).inc()


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware that records HTTP request metrics."""

    async def dispatch(self, request: Request, call_next):
        ACTIVE_REQUESTS.inc()
        start = time.time()

        try:
            response = await call_next(request)
        except Exception:
            ACTIVE_REQUESTS.dec()
            raise

        duration = time.time() - start
        endpoint = request.url.path

        REQUEST_COUNT.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        REQUEST_LATENCY.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)
        ACTIVE_REQUESTS.dec()

        return response


async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
