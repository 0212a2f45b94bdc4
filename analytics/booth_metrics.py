"""
Booth analytics for Booth Leads.

Dashboard aggregates built on top of lead scoring: headline metrics, hourly
lead counts, demographic distributions, the booth heatmap and period trends.
Everything here is a pure function of its inputs.
"""

import logging
import math
from dataclasses import dataclass, asdict
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence, TypeVar

from lead_scoring.catalog import (
    BoothSection,
    Brand,
    BusinessType,
    Category,
    CONTACT_METHOD_NAMES,
)
from lead_scoring.lead import Lead
from lead_scoring.scoring_model import EngagementLevel, LeadScorer

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Lead dashboard window: 9 AM to 5 PM.
LEAD_DISPLAY_HOURS = list(range(9, 18))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def format_hour(hour: int) -> str:
    """Format an hour of day as a 12-hour label, e.g. '9 AM', '12 PM'."""
    period = "PM" if hour >= 12 else "AM"
    display = hour - 12 if hour > 12 else 12 if hour == 0 else hour
    return f"{display} {period}"


def local_time(timestamp: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Wall-clock time of a timestamp at the event.

    Aware timestamps are converted to `tz` when one is given; naive
    timestamps are taken as already local.
    """
    if tz is not None and timestamp.tzinfo is not None:
        return timestamp.astimezone(tz)
    return timestamp


def peak_hour(hours: Sequence[T]) -> Optional[T]:
    """
    Hour bucket with the highest count.

    Buckets are scanned in order and only a strictly greater count replaces
    the current peak, so ties go to the earliest hour. Returns None when
    every bucket is empty.
    """
    peak = None
    peak_count = 0
    for bucket in hours:
        if bucket.count > peak_count:
            peak = bucket
            peak_count = bucket.count
    return peak


def average_per_active_hour(counts: Iterable[int]) -> int:
    """Mean count over hours with activity; idle hours are not samples."""
    active = [c for c in counts if c > 0]
    if not active:
        return 0
    return round_half_up(sum(active) / len(active))


def heatmap_intensities(counts: Sequence[int]) -> List[int]:
    """Scale counts to 0-100 against the busiest zone."""
    max_count = max(max(counts, default=0), 1)
    return [round_half_up(count / max_count * 100) for count in counts]


def conversion_rate(converted: float, total: float) -> float:
    """Percentage of `total` that converted; 0 when there is no traffic."""
    if total <= 0:
        return 0.0
    return converted / total * 100


@dataclass
class HourCount:
    """Count of events in one hour of the day."""
    hour: str
    hour_num: int
    count: int


@dataclass
class BoothMetrics:
    """Headline booth metrics."""
    total_visitors: int
    unique_visitors: int
    average_dwell_time: float
    bounce_rate: float
    peak_hour: str
    conversion_rate: float
    qualified_leads: int
    hot_leads: int
    warm_leads: int
    cold_leads: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class HourlyData:
    hour: str
    visitors: int
    leads: int
    avg_dwell: int


@dataclass
class DemographicData:
    category: str
    value: int
    percentage: float


@dataclass
class Demographics:
    business_type: List[DemographicData]
    categories: List[DemographicData]
    brands: List[DemographicData]
    contact_preference: List[DemographicData]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class HeatmapZone:
    id: str
    name: str
    x: int
    y: int
    width: int
    height: int
    intensity: int  # 0-100
    visitors: int
    avg_dwell: int


# Booth floor layout, in percent of the floor plan.
ZONE_POSITIONS: Dict[str, Dict[str, int]] = {
    "entrance": {"x": 40, "y": 75, "width": 20, "height": 20},
    "beri-display": {"x": 5, "y": 5, "width": 28, "height": 30},
    "raz-display": {"x": 36, "y": 5, "width": 28, "height": 30},
    "lost-mary-display": {"x": 67, "y": 5, "width": 28, "height": 30},
    "dinner-lady-display": {"x": 5, "y": 40, "width": 28, "height": 30},
    "one-tank-display": {"x": 36, "y": 40, "width": 28, "height": 30},
    "ryl-display": {"x": 67, "y": 40, "width": 28, "height": 30},
    "demo-station": {"x": 5, "y": 75, "width": 30, "height": 20},
    "consultation": {"x": 70, "y": 75, "width": 25, "height": 20},
    "product-wall": {"x": 40, "y": 40, "width": 20, "height": 30},
}
DEFAULT_ZONE_POSITION = {"x": 50, "y": 50, "width": 20, "height": 20}


def _average_dwell(leads: Iterable[Lead]) -> float:
    dwell_times = [
        l.dwell_time for l in leads
        if l.dwell_time and l.dwell_time > 0 and math.isfinite(l.dwell_time)
    ]
    if not dwell_times:
        return 0.0
    return sum(dwell_times) / len(dwell_times)


def lead_hour_counts(leads: Iterable[Lead], tz: Optional[tzinfo] = None) -> List[HourCount]:
    """Lead counts for every hour of the day, midnight first."""
    counts = [0] * 24
    for lead in leads:
        counts[local_time(lead.timestamp, tz).hour] += 1
    return [HourCount(format_hour(h), h, counts[h]) for h in range(24)]


def calculate_booth_metrics(
    leads: Sequence[Lead],
    tz: Optional[tzinfo] = None,
    scorer: Optional[LeadScorer] = None,
) -> BoothMetrics:
    """
    Calculate headline metrics for the booth dashboard.

    Args:
        leads: Captured leads
        tz: Event timezone for hour bucketing
        scorer: Scorer used for temperature counts

    Returns:
        BoothMetrics
    """
    scorer = scorer or LeadScorer()
    total = len(leads)

    tiers = {level: 0 for level in EngagementLevel}
    for lead in leads:
        tiers[scorer.score(lead).engagement_level] += 1

    hot = tiers[EngagementLevel.HOT]
    warm = tiers[EngagementLevel.WARM]
    cold = tiers[EngagementLevel.COLD]

    if total:
        bounce_rate = max(5.0, 25 - (hot / total) * 40)
        conversion = conversion_rate(hot + warm, max(total, 1))
    else:
        bounce_rate = 0.0
        conversion = 0.0

    peak = peak_hour(lead_hour_counts(leads, tz))

    return BoothMetrics(
        total_visitors=total,
        unique_visitors=total,
        average_dwell_time=_average_dwell(leads),
        bounce_rate=bounce_rate,
        peak_hour=peak.hour if peak else "N/A",
        conversion_rate=conversion,
        qualified_leads=hot + warm,
        hot_leads=hot,
        warm_leads=warm,
        cold_leads=cold,
    )


def hourly_data(leads: Sequence[Lead], tz: Optional[tzinfo] = None) -> List[HourlyData]:
    """Lead counts and average dwell for each hour of the show day."""
    by_hour: Dict[int, List[Lead]] = {}
    for lead in leads:
        by_hour.setdefault(local_time(lead.timestamp, tz).hour, []).append(lead)

    rows = []
    for hour in LEAD_DISPLAY_HOURS:
        hour_leads = by_hour.get(hour, [])
        rows.append(HourlyData(
            hour=format_hour(hour),
            visitors=len(hour_leads),
            leads=len(hour_leads),
            avg_dwell=round_half_up(_average_dwell(hour_leads)),
        ))
    return rows


def _distribution(labels_and_counts: Iterable, total: int) -> List[DemographicData]:
    return [
        DemographicData(category=label, value=count, percentage=count / total * 100)
        for label, count in labels_and_counts
    ]


def demographics(leads: Sequence[Lead]) -> Demographics:
    """Business type, interest and contact-preference distributions."""
    total = len(leads) or 1

    business_type = _distribution(
        [
            ("Wholesale", sum(1 for l in leads if l.business_type == BusinessType.WHOLESALE)),
            ("Retail", sum(1 for l in leads if l.business_type == BusinessType.RETAIL)),
        ],
        total,
    )

    categories = _distribution(
        [
            (cat.display_name, sum(1 for l in leads if cat.value in l.selected_categories))
            for cat in Category
        ],
        total,
    )
    categories.sort(key=lambda d: d.value, reverse=True)

    brands = _distribution(
        [
            (brand.display_name, sum(1 for l in leads if brand.value in l.selected_brands))
            for brand in Brand
        ],
        total,
    )
    brands.sort(key=lambda d: d.value, reverse=True)

    contact_preference = _distribution(
        [
            (name, sum(1 for l in leads if l.preferred_contact == method))
            for method, name in CONTACT_METHOD_NAMES.items()
        ],
        total,
    )

    return Demographics(
        business_type=business_type,
        categories=categories,
        brands=brands,
        contact_preference=contact_preference,
    )


def heatmap(leads: Sequence[Lead]) -> List[HeatmapZone]:
    """One heatmap zone per booth section."""
    section_counts: Dict[str, int] = {}
    section_dwell: Dict[str, List[Lead]] = {}
    for lead in leads:
        if not lead.booth_section:
            continue
        section_counts[lead.booth_section] = section_counts.get(lead.booth_section, 0) + 1
        section_dwell.setdefault(lead.booth_section, []).append(lead)

    sections = list(BoothSection)
    counts = [section_counts.get(s.value, 0) for s in sections]
    intensities = heatmap_intensities(counts)

    zones = []
    for section, count, intensity in zip(sections, counts, intensities):
        position = ZONE_POSITIONS.get(section.value, DEFAULT_ZONE_POSITION)
        zones.append(HeatmapZone(
            id=section.value,
            name=section.display_name,
            intensity=intensity,
            visitors=count,
            avg_dwell=round_half_up(_average_dwell(section_dwell.get(section.value, []))),
            **position,
        ))
    return zones


def _trend(current: float, previous: float) -> Dict[str, Any]:
    if not previous:
        return {"trend": "neutral", "percentage": 0.0}
    diff = (current - previous) / previous * 100
    if diff > 2:
        trend = "up"
    elif diff < -2:
        trend = "down"
    else:
        trend = "neutral"
    return {"trend": trend, "percentage": abs(diff)}


def calculate_trends(
    current: BoothMetrics,
    previous: Optional[BoothMetrics] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Compare metrics against a previous period.

    Bounce rate is inverted: a lower bounce rate trends up.
    """
    if previous is None:
        return {
            name: {"value": value, "trend": "neutral", "percentage": 0.0}
            for name, value in (
                ("visitors", current.total_visitors),
                ("dwell_time", current.average_dwell_time),
                ("bounce_rate", current.bounce_rate),
                ("conversion", current.conversion_rate),
            )
        }

    return {
        "visitors": {
            "value": current.total_visitors,
            **_trend(current.total_visitors, previous.total_visitors),
        },
        "dwell_time": {
            "value": current.average_dwell_time,
            **_trend(current.average_dwell_time, previous.average_dwell_time),
        },
        "bounce_rate": {
            "value": current.bounce_rate,
            **_trend(previous.bounce_rate, current.bounce_rate),
        },
        "conversion": {
            "value": current.conversion_rate,
            **_trend(current.conversion_rate, previous.conversion_rate),
        },
    }
