"""
AI insight API routes for Booth Leads.
"""

import logging

from fastapi import APIRouter, HTTPException

from api.middleware.metrics import record_insight
from api.services import get_services
from llm.insights import bulk_analysis

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/insights", tags=["insights"])


@router.post("/{lead_id}")
async def generate_insight(lead_id: str):
    """Generate sales insights for a lead and store them on it."""
    services = get_services()
    lead = services.store.get_lead(lead_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")

    insight = await services.insight_generator.generate(lead)
    services.store.update_lead(lead_id, ai_insights=insight.text)
    record_insight(insight.source)

    return {"lead_id": lead_id, **insight.to_dict()}


@router.get("/summary")
async def summary():
    """Summary analysis across all captured leads."""
    return {"analysis": bulk_analysis(get_services().store.list_leads())}
