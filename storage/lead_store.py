"""
LeadStore protocol for Booth Leads.

Abstracts lead and foot traffic storage so the API can work with either an
in-memory store or a local JSON file. The store is passed to whoever needs
it; there is no module-level singleton.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from analytics.foot_traffic import FootTrafficCounter, FootTrafficEntry
from lead_scoring.lead import Lead

logger = logging.getLogger(__name__)

STORE_KEY = "trade-show-leads"
STORE_VERSION = 1


@runtime_checkable
class LeadStore(Protocol):
    """Protocol for lead persistence."""

    def add_lead(self, lead: Lead) -> Lead:
        ...

    def get_lead(self, lead_id: str) -> Optional[Lead]:
        ...

    def update_lead(self, lead_id: str, **changes: Any) -> Optional[Lead]:
        ...

    def delete_lead(self, lead_id: str) -> bool:
        ...

    def list_leads(self) -> List[Lead]:
        """All leads in submission order."""
        ...

    def clear_leads(self) -> None:
        ...

    def add_foot_traffic(self, entry: FootTrafficEntry) -> FootTrafficEntry:
        ...

    def increment_foot_traffic(self, amount: int = 1, now: Optional[datetime] = None) -> None:
        ...

    def list_foot_traffic(self) -> List[FootTrafficEntry]:
        ...

    def clear_foot_traffic(self) -> None:
        ...


class InMemoryLeadStore:
    """Lead store held in process memory."""

    def __init__(self):
        self._leads: Dict[str, Lead] = {}
        self._foot_traffic: List[FootTrafficEntry] = []
        self._counter = FootTrafficCounter()

    def _changed(self) -> None:
        """Hook for subclasses that persist state."""

    def add_lead(self, lead: Lead) -> Lead:
        self._leads[lead.id] = lead
        self._changed()
        logger.info(f"Lead stored: {lead.id}")
        return lead

    def get_lead(self, lead_id: str) -> Optional[Lead]:
        return self._leads.get(lead_id)

    def update_lead(self, lead_id: str, **changes: Any) -> Optional[Lead]:
        lead = self._leads.get(lead_id)
        if lead is None:
            return None
        updated = lead.with_updates(**changes)
        self._leads[lead_id] = updated
        self._changed()
        return updated

    def delete_lead(self, lead_id: str) -> bool:
        if self._leads.pop(lead_id, None) is None:
            return False
        self._changed()
        return True

    def list_leads(self) -> List[Lead]:
        return list(self._leads.values())

    def clear_leads(self) -> None:
        self._leads.clear()
        self._changed()

    def add_foot_traffic(self, entry: FootTrafficEntry) -> FootTrafficEntry:
        self._foot_traffic.append(entry)
        self._changed()
        return entry

    def increment_foot_traffic(self, amount: int = 1, now: Optional[datetime] = None) -> None:
        self._foot_traffic = self._counter.increment(self._foot_traffic, amount, now)
        self._changed()

    def list_foot_traffic(self) -> List[FootTrafficEntry]:
        return list(self._foot_traffic)

    def clear_foot_traffic(self) -> None:
        self._foot_traffic = []
        self._changed()


class JsonFileLeadStore(InMemoryLeadStore):
    """
    Lead store persisted to a local JSON file.

    The file holds one key-value document:
    {"trade-show-leads": {"version": 1, "state": {"submissions": [...],
    "foot_traffic_entries": [...]}}}
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        with self.path.open("r", encoding="utf-8") as f:
            document = json.load(f)

        stored = document.get(STORE_KEY, {})
        if stored.get("version") != STORE_VERSION:
            logger.warning(
                f"Ignoring lead store {self.path}: unsupported version {stored.get('version')}"
            )
            return

        state = stored.get("state", {})
        for item in state.get("submissions", []):
            lead = Lead.from_dict(item)
            self._leads[lead.id] = lead
        self._foot_traffic = [
            FootTrafficEntry.from_dict(item) for item in state.get("foot_traffic_entries", [])
        ]
        logger.info(f"Loaded {len(self._leads)} leads from {self.path}")

    def _changed(self) -> None:
        document = {
            STORE_KEY: {
                "version": STORE_VERSION,
                "state": {
                    "submissions": [lead.to_dict() for lead in self._leads.values()],
                    "foot_traffic_entries": [e.to_dict() for e in self._foot_traffic],
                },
            }
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)
        tmp_path.replace(self.path)
