"""
Booth analytics dashboard API routes for Booth Leads.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter

from analytics.booth_metrics import (
    calculate_booth_metrics,
    calculate_trends,
    demographics,
    heatmap,
    hourly_data,
)
from api.services import get_services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/metrics")
async def booth_metrics():
    """Headline booth metrics with trend indicators."""
    services = get_services()
    metrics = calculate_booth_metrics(
        services.store.list_leads(),
        tz=services.settings.event_tz,
        scorer=services.lead_scorer,
    )
    return {
        "metrics": metrics.to_dict(),
        "trends": calculate_trends(metrics),
    }


@router.get("/hourly")
async def hourly():
    """Leads and average dwell for each show hour."""
    services = get_services()
    rows = hourly_data(services.store.list_leads(), tz=services.settings.event_tz)
    return {"hours": [asdict(r) for r in rows]}


@router.get("/demographics")
async def demographic_breakdown():
    """Business type, interest and contact preference distributions."""
    return demographics(get_services().store.list_leads()).to_dict()


@router.get("/heatmap")
async def booth_heatmap():
    """Visitor intensity per booth section."""
    zones = heatmap(get_services().store.list_leads())
    return {"zones": [asdict(z) for z in zones]}
