"""
Lead export API routes for Booth Leads.
"""

import io
import logging
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse, StreamingResponse

from analytics.booth_metrics import local_time
from api.services import get_services
from exports.spreadsheet import (
    DAILY_COLUMNS,
    ENTRY_COLUMNS,
    HOURLY_COLUMNS,
    daily_totals_rows,
    email_summary,
    export_rows,
    foot_traffic_entry_rows,
    foot_traffic_summary_rows,
    hourly_breakdown_rows,
    write_csv,
)
from lead_scoring.filtering import LeadFilter, LeadSort, filter_leads, sort_leads
from lead_scoring.segmentation import segment_leads

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/export", tags=["export"])


def _csv_response(rows, filename: str, columns=None) -> StreamingResponse:
    output = io.StringIO()
    write_csv(rows, output, columns)
    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def _show_day(day: Optional[str], tz) -> date:
    """Requested show day, or today at the event."""
    if not day:
        return local_time(datetime.now(timezone.utc), tz).date()
    try:
        return datetime.strptime(day, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid day, expected YYYY-MM-DD")


@router.get("/leads.csv")
async def export_leads(
    filter: LeadFilter = LeadFilter.ALL,
    sort: LeadSort = LeadSort.SCORE,
):
    """Download leads as CSV, one row per lead."""
    services = get_services()
    leads = services.store.list_leads()
    segments = segment_leads(leads, services.lead_scorer)
    selected = sort_leads(filter_leads(leads, segments, filter), sort, segments.scores)

    rows = export_rows(selected, segments.scores, services.settings.event_tz)
    logger.info(f"Exporting {len(rows)} lead(s) as CSV")

    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    return _csv_response(rows, f"trade-show-leads-{stamp}.csv")


@router.get("/foot-traffic.csv")
async def export_foot_traffic(day: Optional[str] = None):
    """Download the foot traffic summary for a show day as CSV."""
    services = get_services()
    tz = services.settings.event_tz
    as_of = _show_day(day, tz)

    rows = foot_traffic_summary_rows(
        services.store.list_foot_traffic(), services.store.list_leads(), as_of, tz
    )
    return _csv_response(
        rows, f"foot-traffic-{as_of.isoformat()}.csv", columns=["Metric", "Value"]
    )


@router.get("/foot-traffic-hourly.csv")
async def export_hourly_breakdown(day: Optional[str] = None):
    """Download visitors per hour for a show day as CSV."""
    services = get_services()
    tz = services.settings.event_tz
    as_of = _show_day(day, tz)
    rows = hourly_breakdown_rows(services.store.list_foot_traffic(), as_of, tz)
    return _csv_response(
        rows, f"foot-traffic-hourly-{as_of.isoformat()}.csv", columns=HOURLY_COLUMNS
    )


@router.get("/foot-traffic-entries.csv")
async def export_foot_traffic_entries():
    """Download every logged foot traffic entry as CSV."""
    services = get_services()
    rows = foot_traffic_entry_rows(
        services.store.list_foot_traffic(), services.settings.event_tz
    )
    return _csv_response(rows, "foot-traffic-entries.csv", columns=ENTRY_COLUMNS)


@router.get("/daily-totals.csv")
async def export_daily_totals():
    """Download per-day foot traffic, leads and conversion rate as CSV."""
    services = get_services()
    rows = daily_totals_rows(
        services.store.list_foot_traffic(),
        services.store.list_leads(),
        services.settings.event_tz,
    )
    return _csv_response(rows, "daily-totals.csv", columns=DAILY_COLUMNS)


@router.get("/email-summary", response_class=PlainTextResponse)
async def export_email_summary():
    """Plain-text lead summary for email."""
    return email_summary(get_services().store.list_leads())
