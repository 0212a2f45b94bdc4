"""
GDPR helpers for Booth Leads.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from lead_scoring.lead import Lead

MASK = "***"


def gdpr_consent(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Default consent record captured with a lead."""
    return {
        "data_collection": True,
        "marketing": False,
        "third_party_sharing": False,
        "timestamp": (now or datetime.now(timezone.utc)).isoformat(),
    }


def anonymize_lead(lead: Lead) -> Lead:
    """
    Mask personal fields on a copy of the lead.

    Email keeps its first two characters and domain; phone keeps its first
    three and last two digits.
    """
    return lead.with_updates(
        first_name=MASK,
        last_name=MASK,
        email=re.sub(r"^(.{2}).*(@.*)$", r"\1***\2", lead.email),
        phone=re.sub(r"^(\d{3}).*(\d{2})$", r"\1-***-**\2", lead.phone),
        address=MASK,
    )
