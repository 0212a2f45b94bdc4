"""
Lead Management API Routes for Booth Leads.
"""

import logging
from typing import List, Dict, Any, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from api.middleware.metrics import record_lead_score
from api.services import get_services
from lead_scoring.catalog import BoothSection, Brand, BusinessType, Category, ContactMethod
from lead_scoring.filtering import (
    LeadFilter,
    LeadSort,
    filter_leads,
    search_leads,
    sort_leads,
    top_leads,
)
from lead_scoring.lead import Lead
from lead_scoring.scoring_model import priority_actions
from lead_scoring.segmentation import segment_leads

logger = logging.getLogger(__name__)

router = APIRouter()


# Models
class LeadCreate(BaseModel):
    """Lead capture request from the intake form."""
    booth_section: str = ""
    salesperson: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    business_name: str = ""
    business_type: BusinessType = BusinessType.UNSET
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    selected_brands: List[str] = []
    selected_categories: List[str] = []
    preferred_contact: ContactMethod = ContactMethod.UNSET
    best_time_to_contact: str = ""
    notes: str = ""
    placed_order: bool = False
    order_notes: str = ""
    dwell_time: Optional[float] = Field(
        None, ge=0, allow_inf_nan=False, description="Seconds spent at the booth"
    )
    visit_count: Optional[int] = None


class LeadUpdate(BaseModel):
    """Partial lead update. Only fields that are sent are changed."""
    booth_section: Optional[str] = None
    salesperson: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    business_name: Optional[str] = None
    business_type: Optional[BusinessType] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    selected_brands: Optional[List[str]] = None
    selected_categories: Optional[List[str]] = None
    preferred_contact: Optional[ContactMethod] = None
    best_time_to_contact: Optional[str] = None
    notes: Optional[str] = None
    placed_order: Optional[bool] = None
    order_notes: Optional[str] = None
    dwell_time: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    visit_count: Optional[int] = None


class LeadList(BaseModel):
    """Paginated lead list."""
    leads: List[Dict[str, Any]]
    total: int
    page: int
    page_size: int
    has_next: bool


def _lead_response(lead: Lead) -> Dict[str, Any]:
    services = get_services()
    score = services.lead_scorer.score(lead)
    return {**lead.to_dict(), "score": score.to_dict()}


def _get_lead_or_404(lead_id: str) -> Lead:
    lead = get_services().store.get_lead(lead_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.post("/leads", status_code=201)
async def create_lead(request: LeadCreate):
    """
    Capture a new lead.

    The lead gets a generated id and the current timestamp; its score is
    computed on read and never stored.
    """
    services = get_services()
    lead = Lead.new(**request.model_dump())
    services.store.add_lead(lead)

    score = services.lead_scorer.score(lead)
    record_lead_score(score.total, score.engagement_level.value)
    logger.info(
        f"Lead created: {lead.id}, score: {score.total}, "
        f"grade: {score.grade.value}, engagement: {score.engagement_level.value}"
    )

    return {**lead.to_dict(), "score": score.to_dict()}


@router.get("/leads", response_model=LeadList)
async def list_leads(
    filter: LeadFilter = LeadFilter.ALL,
    search: Optional[str] = None,
    sort: LeadSort = LeadSort.SCORE,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100)
):
    """
    List leads with filtering, search, sorting and pagination.
    """
    services = get_services()
    leads = services.store.list_leads()
    segments = segment_leads(leads, services.lead_scorer)

    filtered = filter_leads(leads, segments, filter)
    filtered = search_leads(filtered, search)
    ordered = sort_leads(filtered, sort, segments.scores)

    # Paginate
    total = len(ordered)
    start = (page - 1) * page_size
    end = start + page_size
    paginated = ordered[start:end]

    return LeadList(
        leads=[
            {**l.to_dict(), "score": segments.scores[l.id].to_dict()}
            for l in paginated
        ],
        total=total,
        page=page,
        page_size=page_size,
        has_next=end < total
    )


@router.get("/leads/segments/summary")
async def get_segment_summary():
    """Bucket sizes for every segment, plus the top three leads."""
    services = get_services()
    leads = services.store.list_leads()
    segments = segment_leads(leads, services.lead_scorer)
    top = top_leads(leads, 3, segments.scores)

    return {
        "total": len(leads),
        "counts": segments.counts(),
        "top_leads": [
            {
                "id": l.id,
                "name": l.full_name,
                "business_name": l.business_name,
                "score": segments.scores[l.id].total,
                "grade": segments.scores[l.id].grade.value,
            }
            for l in top
        ],
    }


@router.get("/leads/catalog")
async def get_catalog():
    """Brands, product categories and booth sections offered on the intake form."""
    return {
        "brands": [{"id": b.value, "name": b.display_name} for b in Brand],
        "categories": [
            {"id": c.value, "name": c.display_name, "description": c.description}
            for c in Category
        ],
        "booth_sections": [{"id": s.value, "name": s.display_name} for s in BoothSection],
    }

@router.get("/leads/{lead_id}")
async def get_lead(lead_id: str):
    """Get a specific lead with its score."""
    return _lead_response(_get_lead_or_404(lead_id))


@router.patch("/leads/{lead_id}")
async def update_lead(lead_id: str, update: LeadUpdate):
    """Update a lead."""
    _get_lead_or_404(lead_id)

    # Only the engagement signals may be cleared with null.
    changes = {
        name: value
        for name, value in update.model_dump(exclude_unset=True).items()
        if value is not None or name in ("dwell_time", "visit_count")
    }

    lead = get_services().store.update_lead(lead_id, **changes)
    logger.info(f"Lead updated: {lead_id}")

    return _lead_response(lead)


@router.delete("/leads/{lead_id}")
async def delete_lead(lead_id: str):
    """Delete a lead."""
    if not get_services().store.delete_lead(lead_id):
        raise HTTPException(status_code=404, detail="Lead not found")

    return {"message": "Lead deleted", "lead_id": lead_id}


@router.get("/leads/{lead_id}/score")
async def get_lead_score(lead_id: str):
    """Score breakdown for a lead."""
    lead = _get_lead_or_404(lead_id)
    return get_services().lead_scorer.score(lead).to_dict()


@router.get("/leads/{lead_id}/actions")
async def get_lead_actions(lead_id: str):
    """Recommended follow-up actions for a lead."""
    lead = _get_lead_or_404(lead_id)
    score = get_services().lead_scorer.score(lead)
    return {
        "lead_id": lead_id,
        "grade": score.grade.value,
        "actions": priority_actions(lead, score),
    }
