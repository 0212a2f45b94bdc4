"""
CRM Sync for Booth Leads.

Simulated CRM connector: connection checks, lead sync with a configurable
failure rate, and company-data enrichment. Calls are async and only ever
return plain data; they never touch scores or segments.
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from lead_scoring.catalog import BusinessType
from lead_scoring.lead import EnrichedLeadData, Lead

logger = logging.getLogger(__name__)


class CRMPlatform(str, Enum):
    """Supported CRM platforms."""
    HUBSPOT = "hubspot"
    SALESFORCE = "salesforce"
    SALESGENT = "salesgent"
    NONE = "none"

    @property
    def display_name(self) -> str:
        return {
            CRMPlatform.HUBSPOT: "HubSpot",
            CRMPlatform.SALESFORCE: "Salesforce",
            CRMPlatform.SALESGENT: "Salesgent",
            CRMPlatform.NONE: "None",
        }[self]


@dataclass
class CRMConfig:
    """Connection state for the active CRM."""
    platform: CRMPlatform = CRMPlatform.NONE
    api_key: Optional[str] = None
    connected: bool = False
    last_sync: Optional[datetime] = None
    auto_sync: bool = False
    sync_interval: int = 15  # minutes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.platform.value,
            "connected": self.connected,
            "last_sync": self.last_sync.isoformat() if self.last_sync else None,
            "auto_sync": self.auto_sync,
            "sync_interval": self.sync_interval,
        }


@dataclass
class CRMConnectResult:
    success: bool
    message: str


@dataclass
class CRMSyncResult:
    """Outcome of a sync run."""
    success: bool
    synced_count: int
    failed_count: int
    errors: List[str] = field(default_factory=list)
    synced_leads: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "synced_count": self.synced_count,
            "failed_count": self.failed_count,
            "errors": self.errors,
            "synced_leads": self.synced_leads,
        }


@dataclass(frozen=True)
class FieldMapping:
    field: str
    crm_field: str
    required: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "crm_field": self.crm_field, "required": self.required}


# field -> (hubspot, salesforce, salesgent), required
_FIELD_MAP = [
    ("first_name", ("firstname", "FirstName", "first_name"), True),
    ("last_name", ("lastname", "LastName", "last_name"), True),
    ("email", ("email", "Email", "email"), True),
    ("phone", ("phone", "Phone", "phone"), False),
    ("business_name", ("company", "Company", "company"), False),
    ("business_type", ("lead_type", "Type", "business_type"), False),
    ("address", ("address", "Street", "address"), False),
    ("city", ("city", "City", "city"), False),
    ("state", ("state", "State", "state"), False),
    ("zip_code", ("zip", "PostalCode", "zip"), False),
    ("lead_score", ("lead_score", "Lead_Score__c", "lead_score"), False),
    ("notes", ("notes", "Description", "notes"), False),
]

_PLATFORM_COLUMN = {
    CRMPlatform.HUBSPOT: 0,
    CRMPlatform.SALESFORCE: 1,
    CRMPlatform.SALESGENT: 2,
}


def field_mapping(platform: CRMPlatform) -> List[FieldMapping]:
    """
    Outbound field mapping for a CRM platform.

    Args:
        platform: Target CRM (not NONE)

    Returns:
        Lead field to CRM field mappings
    """
    column = _PLATFORM_COLUMN[CRMPlatform(platform)]
    return [
        FieldMapping(field=name, crm_field=crm_fields[column], required=required)
        for name, crm_fields, required in _FIELD_MAP
    ]


def to_crm_payload(lead: Lead, platform: CRMPlatform, lead_score: int) -> Dict[str, Any]:
    """
    Convert a lead to a CRM record.

    Args:
        lead: Lead to send
        platform: Target CRM
        lead_score: Total score from the scoring engine

    Returns:
        Dictionary keyed by CRM field names
    """
    values = {
        "first_name": lead.first_name,
        "last_name": lead.last_name,
        "email": lead.email,
        "phone": lead.phone,
        "business_name": lead.business_name,
        "business_type": lead.business_type.value,
        "address": lead.address,
        "city": lead.city,
        "state": lead.state,
        "zip_code": lead.zip_code,
        "lead_score": lead_score,
        "notes": lead.notes,
    }
    record = {m.crm_field: values[m.field] for m in field_mapping(platform)}
    if CRMPlatform(platform) == CRMPlatform.HUBSPOT:
        return {"properties": record}
    return record


COMPANY_SIZES = ["1-10", "11-50", "51-200", "201-500", "500+"]
INDUSTRIES = ["Retail", "Distribution", "Convenience Stores", "Smoke Shops", "Vape Shops"]
REVENUES = ["<$100K", "$100K-$500K", "$500K-$1M", "$1M-$5M", "$5M+"]


def enrich_lead(lead: Lead, rng: Optional[random.Random] = None) -> EnrichedLeadData:
    """
    Simulated company and profile lookup.

    Wholesale buyers are drawn from the upper revenue bands.
    """
    rng = rng or random.Random()
    values: Dict[str, Any] = {}

    if lead.business_name:
        values["company_size"] = rng.choice(COMPANY_SIZES)
        values["industry"] = rng.choice(INDUSTRIES)
        if lead.business_type == BusinessType.WHOLESALE:
            values["annual_revenue"] = rng.choice(REVENUES[2:4])
        else:
            values["annual_revenue"] = rng.choice(REVENUES[:3])
        slug = "".join(lead.business_name.lower().split())
        values["website_url"] = f"https://{slug}.com"

    if lead.first_name and lead.last_name:
        values["linkedin_url"] = (
            f"https://linkedin.com/in/{lead.first_name.lower()}-{lead.last_name.lower()}"
        )
        values["job_title"] = (
            "Purchasing Manager"
            if lead.business_type == BusinessType.WHOLESALE
            else "Store Owner"
        )

    return EnrichedLeadData(**values)


class CRMClient:
    """
    Simulated CRM client.

    Supports:
    - Connection with API key validation
    - Lead sync with random per-lead failures
    - Lead enrichment
    """

    MIN_API_KEY_LENGTH = 10

    def __init__(
        self,
        simulated_delay: float = 1.5,
        failure_rate: float = 0.05,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the CRM client.

        Args:
            simulated_delay: Seconds each call waits to mimic network latency
            failure_rate: Probability that a single lead fails to sync
            rng: Random source for failures and enrichment
        """
        self.simulated_delay = simulated_delay
        self.failure_rate = failure_rate
        self.rng = rng or random.Random()

    async def _delay(self):
        if self.simulated_delay > 0:
            await asyncio.sleep(self.simulated_delay)

    async def connect(self, platform: CRMPlatform, api_key: str) -> CRMConnectResult:
        """
        Validate credentials for a CRM platform.

        Args:
            platform: CRM to connect to
            api_key: API key for the CRM

        Returns:
            CRMConnectResult
        """
        await self._delay()

        if len(api_key or "") < self.MIN_API_KEY_LENGTH:
            logger.warning(f"CRM connect rejected for {platform.value}: invalid API key")
            return CRMConnectResult(success=False, message="Invalid API key format")

        logger.info(f"Connected to CRM: {platform.value}")
        return CRMConnectResult(
            success=True,
            message=f"Successfully connected to {CRMPlatform(platform).display_name}",
        )

    async def sync_leads(self, leads: Sequence[Lead], config: CRMConfig) -> CRMSyncResult:
        """
        Push leads to the connected CRM.

        Args:
            leads: Leads to sync
            config: Current CRM configuration

        Returns:
            CRMSyncResult with per-lead outcomes
        """
        await self._delay()

        if not config.connected:
            logger.warning("CRM not connected, sync skipped")
            return CRMSyncResult(
                success=False,
                synced_count=0,
                failed_count=len(leads),
                errors=["CRM not connected"],
            )

        synced: List[str] = []
        errors: List[str] = []
        for lead in leads:
            if self.rng.random() >= self.failure_rate:
                synced.append(lead.id)
            else:
                errors.append(f"Failed to sync {lead.full_name}: Network timeout")

        logger.info(
            f"CRM sync to {config.platform.value}: "
            f"{len(synced)} synced, {len(errors)} failed"
        )
        return CRMSyncResult(
            success=not errors,
            synced_count=len(synced),
            failed_count=len(errors),
            errors=errors,
            synced_leads=synced,
        )

    async def enrich_leads(
        self,
        leads: Sequence[Lead],
        config: CRMConfig,
    ) -> Dict[str, EnrichedLeadData]:
        """
        Look up company data for leads.

        Returns:
            Enriched data keyed by lead id (empty when not connected)
        """
        await self._delay()

        if not config.connected:
            logger.warning("CRM not connected, enrichment skipped")
            return {}

        return {lead.id: enrich_lead(lead, self.rng) for lead in leads}


def crm_stats(leads: Sequence[Lead]) -> Dict[str, int]:
    """Sync and enrichment counts for the CRM panel."""
    synced = sum(1 for l in leads if l.crm_synced)
    return {
        "total_leads": len(leads),
        "synced": synced,
        "pending": len(leads) - synced,
        "enriched": sum(1 for l in leads if l.enriched_data),
        "hubspot_count": sum(1 for l in leads if l.crm_platform == CRMPlatform.HUBSPOT.value),
        "salesforce_count": sum(
            1 for l in leads if l.crm_platform == CRMPlatform.SALESFORCE.value
        ),
        "salesgent_count": sum(
            1 for l in leads if l.crm_platform == CRMPlatform.SALESGENT.value
        ),
    }
