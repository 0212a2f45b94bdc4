"""
Lead Scoring Module for Booth Leads.

This module provides lead qualification and segmentation:
- Fixed brand/category catalogs
- Immutable lead records
- Lead scoring (0-100 scale, A-D grades, hot/warm/cold tiers)
- Segmentation into overlapping buckets
- Filtering and sorting for list views
"""

from .catalog import Brand, Category, BusinessType, ContactMethod, BoothSection
from .lead import Lead, EnrichedLeadData
from .scoring_model import (
    LeadScorer,
    LeadScore,
    ScoreFactor,
    LeadGrade,
    EngagementLevel,
    score_lead,
    grade_for_score,
    engagement_for_score,
    priority_actions,
)
from .segmentation import LeadSegments, segment_leads
from .filtering import LeadFilter, LeadSort, filter_leads, search_leads, sort_leads, top_leads

__all__ = [
    "Brand",
    "Category",
    "BusinessType",
    "ContactMethod",
    "BoothSection",
    "Lead",
    "EnrichedLeadData",
    "LeadScorer",
    "LeadScore",
    "ScoreFactor",
    "LeadGrade",
    "EngagementLevel",
    "score_lead",
    "grade_for_score",
    "engagement_for_score",
    "priority_actions",
    "LeadSegments",
    "segment_leads",
    "LeadFilter",
    "LeadSort",
    "filter_leads",
    "search_leads",
    "sort_leads",
    "top_leads",
]
