"""
Foot traffic counter API routes for Booth Leads.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from analytics.booth_metrics import local_time
from analytics.foot_traffic import (
    FootTrafficEntry,
    calculate_foot_traffic_metrics,
    foot_traffic_by_section,
)
from api.services import get_services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/foot-traffic", tags=["foot-traffic"])


class FootTrafficCreate(BaseModel):
    """Manually logged visitor batch."""
    count: int = Field(1, ge=1)
    booth_section: Optional[str] = None
    notes: Optional[str] = None


class IncrementRequest(BaseModel):
    amount: int = Field(1, ge=1)


@router.post("", status_code=201)
async def add_entry(request: FootTrafficCreate):
    """Log a batch of visitors."""
    entry = FootTrafficEntry.new(
        count=request.count,
        booth_section=request.booth_section,
        notes=request.notes,
    )
    get_services().store.add_foot_traffic(entry)
    logger.info(f"Foot traffic logged: {entry.count} visitor(s)")
    return entry.to_dict()


@router.post("/increment")
async def increment(request: IncrementRequest):
    """Counter tap. Taps within a minute of the last entry are merged into it."""
    store = get_services().store
    store.increment_foot_traffic(request.amount)
    entries = store.list_foot_traffic()
    return {"total_count": sum(e.count for e in entries), "entries": len(entries)}


@router.get("")
async def list_entries():
    """All foot traffic entries."""
    return {"entries": [e.to_dict() for e in get_services().store.list_foot_traffic()]}


@router.get("/metrics")
async def metrics(
    day: Optional[str] = Query(None, description="Show day (YYYY-MM-DD); defaults to today"),
):
    """Foot traffic metrics for a show day."""
    services = get_services()
    tz = services.settings.event_tz

    if day:
        try:
            as_of = datetime.strptime(day, "%Y-%m-%d").date()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid day, expected YYYY-MM-DD")
    else:
        as_of = local_time(datetime.now(timezone.utc), tz).date()

    entries = services.store.list_foot_traffic()
    result = calculate_foot_traffic_metrics(
        entries, services.store.list_leads(), as_of, tz
    )
    return {
        "day": as_of.isoformat(),
        **result.to_dict(),
        "by_section": foot_traffic_by_section(entries),
    }


@router.delete("")
async def clear_entries():
    """Remove all foot traffic entries."""
    get_services().store.clear_foot_traffic()
    return {"message": "Foot traffic cleared"}
