"""
Lead record for Booth Leads.

A lead is created once, at form submission, and never mutated afterwards.
Partial updates go through `Lead.with_updates`, which returns a new record.
Scores are not stored on the lead; they are computed on demand by the
scoring engine.
"""

import uuid
from dataclasses import dataclass, fields, asdict, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from .catalog import BusinessType, ContactMethod


# Client payloads use camelCase; records are snake_case.
_CAMEL_ALIASES = {
    "boothSection": "booth_section",
    "firstName": "first_name",
    "lastName": "last_name",
    "businessName": "business_name",
    "businessType": "business_type",
    "zipCode": "zip_code",
    "selectedBrands": "selected_brands",
    "selectedCategories": "selected_categories",
    "preferredContact": "preferred_contact",
    "bestTimeToContact": "best_time_to_contact",
    "placedOrder": "placed_order",
    "orderNotes": "order_notes",
    "aiInsights": "ai_insights",
    "dwellTime": "dwell_time",
    "visitCount": "visit_count",
    "lastVisit": "last_visit",
    "crmSynced": "crm_synced",
    "crmId": "crm_id",
    "crmPlatform": "crm_platform",
    "enrichedData": "enriched_data",
}


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 instant (a trailing 'Z' is accepted)."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ValueError(f"Invalid timestamp: {value!r}") from e


def _unique(ids: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """De-duplicate identifiers, keeping first-seen order."""
    if not ids:
        return ()
    seen = []
    for item in ids:
        if item not in seen:
            seen.append(item)
    return tuple(seen)


@dataclass(frozen=True)
class EnrichedLeadData:
    """Company and profile data attached by CRM enrichment."""
    company_size: Optional[str] = None
    industry: Optional[str] = None
    annual_revenue: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None
    job_title: Optional[str] = None
    company_description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnrichedLeadData":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class Lead:
    """A trade-show visitor captured through the intake form."""

    # Identity
    id: str
    timestamp: datetime

    # Booth and staff
    booth_section: str = ""
    salesperson: str = ""

    # Contact
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

    # Interests
    selected_brands: Tuple[str, ...] = ()
    selected_categories: Tuple[str, ...] = ()

    # Contact preferences
    preferred_contact: ContactMethod = ContactMethod.UNSET
    best_time_to_contact: str = ""

    notes: str = ""

    # Orders
    placed_order: bool = False
    order_notes: str = ""

    ai_insights: str = ""

    # Engagement signals
    dwell_time: Optional[float] = None  # seconds at the booth
    visit_count: Optional[int] = None
    last_visit: Optional[str] = None

    # CRM
    crm_synced: bool = False
    crm_id: Optional[str] = None
    crm_platform: Optional[str] = None
    enriched_data: Optional[EnrichedLeadData] = None

    def __post_init__(self):
        object.__setattr__(self, "timestamp", parse_timestamp(self.timestamp))
        object.__setattr__(self, "business_type", BusinessType(self.business_type or ""))
        object.__setattr__(
            self, "preferred_contact", ContactMethod(self.preferred_contact or "")
        )
        object.__setattr__(self, "selected_brands", _unique(self.selected_brands))
        object.__setattr__(self, "selected_categories", _unique(self.selected_categories))
        if isinstance(self.enriched_data, dict):
            object.__setattr__(
                self, "enriched_data", EnrichedLeadData.from_dict(self.enriched_data)
            )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def has_full_address(self) -> bool:
        return bool(self.address and self.city and self.state)

    @classmethod
    def new(cls, **values: Any) -> "Lead":
        """Create a lead with a generated id and the current UTC timestamp."""
        values.setdefault("id", str(uuid.uuid4()))
        values.setdefault("timestamp", datetime.now(timezone.utc))
        return cls(**values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Lead":
        """
        Build a lead from a snake_case or camelCase mapping.

        Keys that are not lead fields (scores, UI state) are dropped.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name in known:
                values[name] = value
        if "id" not in values:
            values["id"] = str(uuid.uuid4())
        if not values.get("timestamp"):
            values["timestamp"] = datetime.now(timezone.utc)
        # JSON nulls for string fields mean "not provided".
        for f in fields(cls):
            if f.default == "" and values.get(f.name) is None and f.name in values:
                values[f.name] = ""
        return cls(**values)

    def with_updates(self, **changes: Any) -> "Lead":
        """Return a copy of this lead with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown lead fields: {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dictionary."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "booth_section": self.booth_section,
            "salesperson": self.salesperson,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "business_name": self.business_name,
            "business_type": self.business_type.value,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "selected_brands": list(self.selected_brands),
            "selected_categories": list(self.selected_categories),
            "preferred_contact": self.preferred_contact.value,
            "best_time_to_contact": self.best_time_to_contact,
            "notes": self.notes,
            "placed_order": self.placed_order,
            "order_notes": self.order_notes,
            "ai_insights": self.ai_insights,
            "dwell_time": self.dwell_time,
            "visit_count": self.visit_count,
            "last_visit": self.last_visit,
            "crm_synced": self.crm_synced,
            "crm_id": self.crm_id,
            "crm_platform": self.crm_platform,
            "enriched_data": self.enriched_data.to_dict() if self.enriched_data else None,
        }
