"""
Lead list views: filtering, search and sorting.

All functions return new lists; segmentation buckets are never re-sorted in
place. Sorting is stable, so ties keep their input order.
"""

from enum import Enum
from typing import Dict, List, Optional, Sequence

from .lead import Lead
from .scoring_model import LeadScore, score_lead
from .segmentation import LeadSegments


class LeadFilter(str, Enum):
    ALL = "all"
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class LeadSort(str, Enum):
    SCORE = "score"
    NAME = "name"
    DATE = "date"
    BUSINESS = "business"


def filter_leads(
    leads: Sequence[Lead],
    segments: LeadSegments,
    lead_filter: LeadFilter = LeadFilter.ALL,
) -> List[Lead]:
    """Select the leads for a temperature or grade filter."""
    lead_filter = LeadFilter(lead_filter)
    if lead_filter == LeadFilter.ALL:
        return list(leads)
    if lead_filter in (LeadFilter.HOT, LeadFilter.WARM, LeadFilter.COLD):
        return list(segments.by_engagement(lead_filter.value))
    return list(segments.by_grade[lead_filter.value])


def search_leads(leads: Sequence[Lead], query: Optional[str]) -> List[Lead]:
    """Case-insensitive match on names, email and business name."""
    if not query:
        return list(leads)
    q = query.lower()
    return [
        lead for lead in leads
        if q in lead.first_name.lower()
        or q in lead.last_name.lower()
        or q in lead.email.lower()
        or q in lead.business_name.lower()
    ]


def _score_of(lead: Lead, scores: Optional[Dict[str, LeadScore]]) -> int:
    if scores and lead.id in scores:
        return scores[lead.id].total
    return score_lead(lead).total


def sort_leads(
    leads: Sequence[Lead],
    sort: LeadSort = LeadSort.SCORE,
    scores: Optional[Dict[str, LeadScore]] = None,
) -> List[Lead]:
    """
    Return a sorted copy of the leads.

    Args:
        leads: Leads to sort
        sort: score (highest first), name, date (newest first) or business
        scores: Precomputed scores keyed by lead id

    Returns:
        New list in the requested order
    """
    sort = LeadSort(sort)
    if sort == LeadSort.SCORE:
        return sorted(leads, key=lambda l: _score_of(l, scores), reverse=True)
    if sort == LeadSort.NAME:
        return sorted(leads, key=lambda l: f"{l.first_name} {l.last_name}".lower())
    if sort == LeadSort.DATE:
        return sorted(leads, key=lambda l: l.timestamp.timestamp(), reverse=True)
    return sorted(leads, key=lambda l: (l.business_name or "").lower())


def top_leads(
    leads: Sequence[Lead],
    n: int = 3,
    scores: Optional[Dict[str, LeadScore]] = None,
) -> List[Lead]:
    """Highest-scoring leads, ties in input order."""
    return sort_leads(leads, LeadSort.SCORE, scores)[:n]
