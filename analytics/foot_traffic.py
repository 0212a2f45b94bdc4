"""
Foot traffic counter for Booth Leads.

Staff tap a counter as visitors pass the booth; taps within a minute of the
latest entry are merged into it. Metrics compare today's traffic with the
leads captured today.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional, Sequence

from lead_scoring.catalog import BoothSection
from lead_scoring.lead import Lead, parse_timestamp

from .booth_metrics import (
    average_per_active_hour,
    conversion_rate,
    format_hour,
    local_time,
    peak_hour,
    round_half_up,
)

logger = logging.getLogger(__name__)

# Foot traffic window: 8 AM to 6 PM inclusive.
FOOT_TRAFFIC_HOURS = list(range(8, 19))

# Taps closer together than this are counted into the same entry.
MERGE_WINDOW = timedelta(seconds=60)


@dataclass(frozen=True)
class FootTrafficEntry:
    """A batch of visitors counted at one moment."""
    id: str
    timestamp: datetime
    count: int = 1
    booth_section: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "timestamp", parse_timestamp(self.timestamp))
        if self.count < 1:
            raise ValueError("count must be >= 1")

    @classmethod
    def new(
        cls,
        count: int = 1,
        booth_section: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "FootTrafficEntry":
        return cls(
            id=f"ft-{uuid.uuid4().hex[:12]}",
            timestamp=now or datetime.now(timezone.utc),
            count=count,
            booth_section=booth_section,
            notes=notes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "count": self.count,
            "booth_section": self.booth_section,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FootTrafficEntry":
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            count=data.get("count", 1),
            booth_section=data.get("booth_section") or data.get("boothSection"),
            notes=data.get("notes"),
        )


@dataclass
class FootTrafficHour:
    """Visitors counted in one hour of the window."""
    hour: str
    hour_num: int
    count: int
    entries: List[FootTrafficEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"hour": self.hour, "hour_num": self.hour_num, "count": self.count}


@dataclass
class FootTrafficMetrics:
    total_count: int
    today_count: int
    peak_hour: str
    average_per_hour: int
    conversion_rate: float  # leads / foot traffic, percent
    hourly_data: List[FootTrafficHour]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_count": self.total_count,
            "today_count": self.today_count,
            "peak_hour": self.peak_hour,
            "average_per_hour": self.average_per_hour,
            "conversion_rate": self.conversion_rate,
            "hourly_data": [h.to_dict() for h in self.hourly_data],
        }


def hourly_foot_traffic(
    entries: Sequence[FootTrafficEntry],
    tz: Optional[tzinfo] = None,
) -> List[FootTrafficHour]:
    """Sum entry counts into the 8 AM - 6 PM window."""
    by_hour: Dict[int, List[FootTrafficEntry]] = {}
    for entry in entries:
        by_hour.setdefault(local_time(entry.timestamp, tz).hour, []).append(entry)

    return [
        FootTrafficHour(
            hour=format_hour(hour),
            hour_num=hour,
            count=sum(e.count for e in by_hour.get(hour, [])),
            entries=by_hour.get(hour, []),
        )
        for hour in FOOT_TRAFFIC_HOURS
    ]


def calculate_foot_traffic_metrics(
    entries: Sequence[FootTrafficEntry],
    leads: Sequence[Lead],
    as_of: date,
    tz: Optional[tzinfo] = None,
) -> FootTrafficMetrics:
    """
    Calculate foot traffic metrics for a show day.

    Args:
        entries: All foot traffic entries
        leads: All captured leads
        as_of: Show day to report on
        tz: Event timezone

    Returns:
        FootTrafficMetrics
    """
    today_entries = [e for e in entries if local_time(e.timestamp, tz).date() == as_of]
    today_leads = [l for l in leads if local_time(l.timestamp, tz).date() == as_of]

    today_count = sum(e.count for e in today_entries)
    hours = hourly_foot_traffic(today_entries, tz)
    peak = peak_hour(hours)

    return FootTrafficMetrics(
        total_count=sum(e.count for e in entries),
        today_count=today_count,
        peak_hour=peak.hour if peak else "N/A",
        average_per_hour=average_per_active_hour(h.count for h in hours),
        conversion_rate=conversion_rate(len(today_leads), today_count),
        hourly_data=hours,
    )


@dataclass
class DailyTotal:
    """Foot traffic and leads captured on one show day."""
    day: date
    foot_traffic: int = 0
    leads: int = 0

    @property
    def conversion_rate(self) -> float:
        return conversion_rate(self.leads, self.foot_traffic)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day.isoformat(),
            "foot_traffic": self.foot_traffic,
            "leads": self.leads,
            "conversion_rate": self.conversion_rate,
        }


def daily_totals(
    entries: Sequence[FootTrafficEntry],
    leads: Sequence[Lead],
    tz: Optional[tzinfo] = None,
) -> List[DailyTotal]:
    """Per-day foot traffic and lead counts, oldest day first."""
    days: Dict[date, DailyTotal] = {}
    for entry in entries:
        day = local_time(entry.timestamp, tz).date()
        days.setdefault(day, DailyTotal(day)).foot_traffic += entry.count
    for lead in leads:
        day = local_time(lead.timestamp, tz).date()
        days.setdefault(day, DailyTotal(day)).leads += 1
    return [days[day] for day in sorted(days)]


def foot_traffic_by_section(entries: Sequence[FootTrafficEntry]) -> List[Dict[str, Any]]:
    """Traffic share per booth section; sections without traffic are omitted."""
    section_counts: Dict[str, int] = {}
    total_with_section = 0
    for entry in entries:
        if entry.booth_section:
            section_counts[entry.booth_section] = (
                section_counts.get(entry.booth_section, 0) + entry.count
            )
            total_with_section += entry.count

    rows = []
    for section in BoothSection:
        count = section_counts.get(section.value, 0)
        if count == 0:
            continue
        rows.append({
            "section": section.display_name,
            "count": count,
            "percentage": round_half_up(count / total_with_section * 100),
        })
    return rows


def _as_utc(timestamp: datetime) -> datetime:
    # Naive timestamps (older stores) carry no offset and are read as UTC.
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp


class FootTrafficCounter:
    """Applies counter taps to an entry list without mutating it."""

    def __init__(self, merge_window: timedelta = MERGE_WINDOW):
        self.merge_window = merge_window

    def increment(
        self,
        entries: Sequence[FootTrafficEntry],
        amount: int = 1,
        now: Optional[datetime] = None,
    ) -> List[FootTrafficEntry]:
        """
        Count `amount` more visitors.

        Returns a new entry list: the first entry younger than the merge
        window absorbs the taps, otherwise a new entry is appended.
        """
        now = now or datetime.now(timezone.utc)
        updated = list(entries)
        for i, entry in enumerate(updated):
            if _as_utc(now) - _as_utc(entry.timestamp) < self.merge_window:
                updated[i] = replace(entry, count=entry.count + amount)
                return updated

        updated.append(FootTrafficEntry.new(count=amount, now=now))
        return updated
