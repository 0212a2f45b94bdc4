"""
CRM integration API routes for Booth Leads.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.middleware.metrics import record_crm_sync
from api.services import get_services
from crm.compliance import anonymize_lead, gdpr_consent
from crm.sync import CRMPlatform, crm_stats, field_mapping, to_crm_payload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/crm", tags=["crm"])


class ConnectRequest(BaseModel):
    platform: CRMPlatform
    api_key: str


class LeadSelection(BaseModel):
    """Leads to act on; all leads when omitted."""
    lead_ids: Optional[List[str]] = None


def _select_leads(selection: LeadSelection):
    store = get_services().store
    if selection.lead_ids is None:
        return store.list_leads()
    leads = []
    for lead_id in selection.lead_ids:
        lead = store.get_lead(lead_id)
        if lead is None:
            raise HTTPException(status_code=404, detail=f"Lead not found: {lead_id}")
        leads.append(lead)
    return leads


@router.get("/config")
async def get_config():
    """Current CRM connection state."""
    return get_services().crm_config.to_dict()


@router.post("/connect")
async def connect(request: ConnectRequest):
    """Validate an API key and make the platform the active CRM."""
    services = get_services()
    result = await services.crm_client.connect(request.platform, request.api_key)

    if result.success:
        config = services.crm_config
        config.platform = request.platform
        config.api_key = request.api_key
        config.connected = True

    return {"success": result.success, "message": result.message}


@router.post("/disconnect")
async def disconnect():
    """Drop the active CRM connection."""
    config = get_services().crm_config
    config.connected = False
    config.api_key = None
    return {"message": "Disconnected", "platform": config.platform.value}


@router.post("/sync")
async def sync(selection: LeadSelection):
    """Push leads to the connected CRM and mark the synced ones."""
    services = get_services()
    config = services.crm_config
    leads = _select_leads(selection)

    result = await services.crm_client.sync_leads(leads, config)
    record_crm_sync(config.platform.value, result.synced_count, result.failed_count)

    if result.synced_leads:
        now = datetime.now(timezone.utc)
        for lead_id in result.synced_leads:
            services.store.update_lead(
                lead_id,
                crm_synced=True,
                crm_id=f"{config.platform.value}-{lead_id[:8]}",
                crm_platform=config.platform.value,
            )
        config.last_sync = now

    return result.to_dict()


@router.post("/enrich")
async def enrich(selection: LeadSelection):
    """Attach company data to leads."""
    services = get_services()
    leads = _select_leads(selection)

    enriched = await services.crm_client.enrich_leads(leads, services.crm_config)
    for lead_id, data in enriched.items():
        services.store.update_lead(lead_id, enriched_data=data)

    logger.info(f"Enriched {len(enriched)} lead(s)")
    return {
        "enriched_count": len(enriched),
        "leads": {lead_id: data.to_dict() for lead_id, data in enriched.items()},
    }


@router.get("/field-mapping/{platform}")
async def get_field_mapping(platform: CRMPlatform):
    """Outbound field mapping for a platform."""
    if platform == CRMPlatform.NONE:
        raise HTTPException(status_code=400, detail="No field mapping for platform 'none'")
    return {
        "platform": platform.value,
        "fields": [m.to_dict() for m in field_mapping(platform)],
    }


@router.get("/payload/{lead_id}")
async def preview_payload(lead_id: str):
    """Record that would be sent to the active CRM for a lead."""
    services = get_services()
    lead = services.store.get_lead(lead_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")

    platform = services.crm_config.platform
    if platform == CRMPlatform.NONE:
        raise HTTPException(status_code=400, detail="No CRM platform selected")

    score = services.lead_scorer.score(lead)
    return to_crm_payload(lead, platform, score.total)


@router.get("/stats")
async def stats():
    """Sync and enrichment counts."""
    return crm_stats(get_services().store.list_leads())


@router.get("/gdpr/consent")
async def consent():
    """Consent record to attach to outbound CRM data."""
    return gdpr_consent()


@router.get("/gdpr/anonymized/{lead_id}")
async def anonymized(lead_id: str):
    """Lead with personal contact data masked."""
    lead = get_services().store.get_lead(lead_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return anonymize_lead(lead).to_dict()
