"""
CRM Module for Booth Leads.

Simulated CRM connection, sync and enrichment, outbound field mapping and
GDPR helpers.
"""

from .sync import (
    CRMPlatform,
    CRMConfig,
    CRMClient,
    CRMConnectResult,
    CRMSyncResult,
    FieldMapping,
    field_mapping,
    to_crm_payload,
    enrich_lead,
    crm_stats,
)
from .compliance import anonymize_lead, gdpr_consent

__all__ = [
    "CRMPlatform",
    "CRMConfig",
    "CRMClient",
    "CRMConnectResult",
    "CRMSyncResult",
    "FieldMapping",
    "field_mapping",
    "to_crm_payload",
    "enrich_lead",
    "crm_stats",
    "anonymize_lead",
    "gdpr_consent",
]
