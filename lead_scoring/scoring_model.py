"""
Lead Scoring Model for Booth Leads.

Implements the rule-based scoring system that turns a captured lead into a
0-100 score, a letter grade and an engagement tier. Scoring is a pure
function of the lead's fields: no I/O, no randomness, no shared state.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .catalog import Brand, BusinessType, display_names
from .lead import Lead

logger = logging.getLogger(__name__)


class LeadGrade(str, Enum):
    """Letter grade bands."""
    A = "A"  # Score >= 80
    B = "B"  # Score 60-79
    C = "C"  # Score 40-59
    D = "D"  # Score < 40


class EngagementLevel(str, Enum):
    """Engagement tiers used for temperature filtering."""
    HOT = "hot"    # Score >= 70
    WARM = "warm"  # Score 45-69
    COLD = "cold"  # Score < 45


# Closed lower bounds, highest band first.
GRADE_THRESHOLDS = (
    (80, LeadGrade.A),
    (60, LeadGrade.B),
    (40, LeadGrade.C),
)
ENGAGEMENT_THRESHOLDS = (
    (70, EngagementLevel.HOT),
    (45, EngagementLevel.WARM),
)


def grade_for_score(total: int) -> LeadGrade:
    """Map a total score to its letter grade."""
    for lower_bound, grade in GRADE_THRESHOLDS:
        if total >= lower_bound:
            return grade
    return LeadGrade.D


def engagement_for_score(total: int) -> EngagementLevel:
    """Map a total score to its engagement tier."""
    for lower_bound, level in ENGAGEMENT_THRESHOLDS:
        if total >= lower_bound:
            return level
    return EngagementLevel.COLD


@dataclass(frozen=True)
class ScoreFactor:
    """One weighted contribution to a lead score."""
    name: str
    points: int
    max_points: int
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "points": self.points,
            "max_points": self.max_points,
            "description": self.description,
        }


@dataclass(frozen=True)
class LeadScore:
    """Lead score breakdown."""
    total: int  # 0-100
    grade: LeadGrade
    engagement_level: EngagementLevel
    factors: List[ScoreFactor] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "grade": self.grade.value,
            "engagement_level": self.engagement_level.value,
            "factors": [f.to_dict() for f in self.factors],
        }


class LeadScorer:
    """
    Scores trade-show leads from their captured fields.

    Scoring Rules (0-100):
    - Business Type (max 15): wholesale 15, retail 10, unset 0
    - Contact Completeness (max 20): +5 each for email, phone, business name,
      and a full address (street, city and state)
    - Brand Interest (max 20): 4 per selected brand
    - Category Interest (max 20): 4 per selected category
    - Booth Engagement (max 15): 3 per whole minute of dwell time,
      5 when dwell time was not tracked
    - Expressed Intent (max 10): 1 per 20 characters of notes

    Grades: >= 80 A, >= 60 B, >= 40 C, else D.
    Engagement: >= 70 hot, >= 45 warm, else cold.
    """

    BUSINESS_TYPE_POINTS = {
        BusinessType.WHOLESALE: 15,
        BusinessType.RETAIL: 10,
        BusinessType.UNSET: 0,
    }

    BUSINESS_TYPE_MAX = 15
    CONTACT_MAX = 20
    CONTACT_FIELD_POINTS = 5
    BRAND_MAX = 20
    CATEGORY_MAX = 20
    INTEREST_POINTS = 4
    ENGAGEMENT_MAX = 15
    POINTS_PER_MINUTE = 3
    UNTRACKED_DWELL_POINTS = 5
    INTENT_MAX = 10
    NOTE_CHARS_PER_POINT = 20

    def score(self, lead: Lead) -> LeadScore:
        """
        Calculate the score breakdown for a lead.

        Args:
            lead: Lead to score

        Returns:
            LeadScore with total, grade, engagement tier and factors
        """
        factors = [
            self._score_business_type(lead),
            self._score_contact(lead),
            self._score_interest(
                "Brand Interest", len(lead.selected_brands), self.BRAND_MAX, "brands"
            ),
            self._score_interest(
                "Category Interest",
                len(lead.selected_categories),
                self.CATEGORY_MAX,
                "categories",
            ),
            self._score_engagement(lead),
            self._score_intent(lead),
        ]

        total = sum(f.points for f in factors)

        return LeadScore(
            total=total,
            grade=grade_for_score(total),
            engagement_level=engagement_for_score(total),
            factors=factors,
        )

    def _score_business_type(self, lead: Lead) -> ScoreFactor:
        points = self.BUSINESS_TYPE_POINTS.get(lead.business_type, 0)
        if lead.business_type == BusinessType.WHOLESALE:
            description = "High-value wholesale buyer"
        elif lead.business_type == BusinessType.RETAIL:
            description = "Retail customer"
        else:
            description = "Business type not provided"
        return ScoreFactor("Business Type", points, self.BUSINESS_TYPE_MAX, description)

    def _score_contact(self, lead: Lead) -> ScoreFactor:
        completed = sum(
            1 for present in (
                lead.email,
                lead.phone,
                lead.business_name,
                lead.has_full_address,
            ) if present
        )
        return ScoreFactor(
            "Contact Completeness",
            completed * self.CONTACT_FIELD_POINTS,
            self.CONTACT_MAX,
            f"{completed} of 4 contact fields completed",
        )

    def _score_interest(self, name: str, count: int, max_points: int, noun: str) -> ScoreFactor:
        points = min(count * self.INTEREST_POINTS, max_points)
        return ScoreFactor(name, points, max_points, f"Interested in {count} {noun}")

    def _score_engagement(self, lead: Lead) -> ScoreFactor:
        # A zero or NaN dwell time means the visit was not tracked.
        dwell_time = lead.dwell_time
        if not dwell_time or math.isnan(dwell_time):
            return ScoreFactor(
                "Booth Engagement",
                self.UNTRACKED_DWELL_POINTS,
                self.ENGAGEMENT_MAX,
                "Standard engagement",
            )

        if math.isinf(dwell_time) and dwell_time > 0:
            return ScoreFactor(
                "Booth Engagement",
                self.ENGAGEMENT_MAX,
                self.ENGAGEMENT_MAX,
                "Extended time at booth",
            )

        minutes = int(max(dwell_time, 0) // 60)
        points = min(minutes * self.POINTS_PER_MINUTE, self.ENGAGEMENT_MAX)
        return ScoreFactor(
            "Booth Engagement",
            points,
            self.ENGAGEMENT_MAX,
            f"{minutes} minutes at booth",
        )

    def _score_intent(self, lead: Lead) -> ScoreFactor:
        if not lead.notes:
            return ScoreFactor(
                "Expressed Intent", 0, self.INTENT_MAX, "No specific requirements noted"
            )
        points = min(len(lead.notes) // self.NOTE_CHARS_PER_POINT, self.INTENT_MAX)
        return ScoreFactor(
            "Expressed Intent", points, self.INTENT_MAX, "Provided detailed requirements"
        )


_default_scorer = LeadScorer()


def score_lead(lead: Lead) -> LeadScore:
    """Score a lead with the default scorer."""
    return _default_scorer.score(lead)


def priority_actions(lead: Lead, score: Optional[LeadScore] = None) -> List[str]:
    """
    Follow-up actions for a lead based on its grade.

    Args:
        lead: Lead to plan follow-up for
        score: Precomputed score, to avoid rescoring

    Returns:
        Ordered list of recommended actions
    """
    score = score or score_lead(lead)
    actions: List[str] = []

    if score.grade == LeadGrade.A:
        actions.append("High-priority follow-up within 24 hours")
        actions.append("Schedule discovery call")
        if lead.business_type == BusinessType.WHOLESALE:
            actions.append("Prepare volume pricing proposal")
    elif score.grade == LeadGrade.B:
        actions.append("Send personalized email within 48 hours")
        actions.append("Share product catalog")
    elif score.grade == LeadGrade.C:
        actions.append("Add to nurture campaign")
        actions.append("Connect on social media")
    else:
        actions.append("Add to general mailing list")

    brand_names = display_names(lead.selected_brands, Brand)
    if brand_names:
        actions.append(f"Highlight {', '.join(brand_names)} products")

    return actions
