"""
Lead segmentation for Booth Leads.

Partitions a lead collection into overlapping bucket sets: engagement tier,
grade, business type, product category and brand. Each lead is scored once;
buckets hold the original lead objects in input order.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .catalog import Brand, BusinessType, Category
from .lead import Lead
from .scoring_model import EngagementLevel, LeadGrade, LeadScore, LeadScorer

logger = logging.getLogger(__name__)


def _grade_buckets() -> Dict[str, List[Lead]]:
    return {grade.value: [] for grade in LeadGrade}


def _business_type_buckets() -> Dict[str, List[Lead]]:
    return {
        bt.value: [] for bt in BusinessType if bt != BusinessType.UNSET
    }


def _category_buckets() -> Dict[str, List[Lead]]:
    return {cat.value: [] for cat in Category}


def _brand_buckets() -> Dict[str, List[Lead]]:
    return {brand.value: [] for brand in Brand}


@dataclass
class LeadSegments:
    """
    Result of segmenting a lead collection.

    Every catalog id has a bucket in `by_category` and `by_brand`, even when
    no lead selected it. `scores` maps lead id to the score computed during
    segmentation so consumers can sort without rescoring; lead ids are
    expected to be unique, as they are in every LeadStore.
    """
    hot: List[Lead] = field(default_factory=list)
    warm: List[Lead] = field(default_factory=list)
    cold: List[Lead] = field(default_factory=list)
    by_grade: Dict[str, List[Lead]] = field(default_factory=_grade_buckets)
    by_business_type: Dict[str, List[Lead]] = field(default_factory=_business_type_buckets)
    by_category: Dict[str, List[Lead]] = field(default_factory=_category_buckets)
    by_brand: Dict[str, List[Lead]] = field(default_factory=_brand_buckets)
    scores: Dict[str, LeadScore] = field(default_factory=dict)

    def by_engagement(self, level: EngagementLevel) -> List[Lead]:
        """Bucket for an engagement tier."""
        return {
            EngagementLevel.HOT: self.hot,
            EngagementLevel.WARM: self.warm,
            EngagementLevel.COLD: self.cold,
        }[EngagementLevel(level)]

    def counts(self) -> Dict[str, Dict[str, int]]:
        """Bucket sizes, keyed the same way as the buckets."""
        return {
            "engagement": {
                "hot": len(self.hot),
                "warm": len(self.warm),
                "cold": len(self.cold),
            },
            "grade": {k: len(v) for k, v in self.by_grade.items()},
            "business_type": {k: len(v) for k, v in self.by_business_type.items()},
            "category": {k: len(v) for k, v in self.by_category.items()},
            "brand": {k: len(v) for k, v in self.by_brand.items()},
        }


def segment_leads(
    leads: Iterable[Lead],
    scorer: Optional[LeadScorer] = None,
) -> LeadSegments:
    """
    Segment leads in a single pass.

    Args:
        leads: Leads in display order
        scorer: Scorer to rank leads with (default LeadScorer)

    Returns:
        LeadSegments with every bucket populated
    """
    scorer = scorer or LeadScorer()
    segments = LeadSegments()

    for lead in leads:
        score = scorer.score(lead)
        if lead.id in segments.scores:
            logger.warning(f"Duplicate lead id {lead.id!r}: only its last score is kept")
        segments.scores[lead.id] = score

        segments.by_engagement(score.engagement_level).append(lead)
        segments.by_grade[score.grade.value].append(lead)

        if lead.business_type != BusinessType.UNSET:
            segments.by_business_type[lead.business_type.value].append(lead)

        # Unknown ids were counted by the scorer but have no bucket.
        for category_id in lead.selected_categories:
            bucket = segments.by_category.get(category_id)
            if bucket is not None:
                bucket.append(lead)

        for brand_id in lead.selected_brands:
            bucket = segments.by_brand.get(brand_id)
            if bucket is not None:
                bucket.append(lead)

    logger.debug(
        f"Segmented leads: hot={len(segments.hot)} "
        f"warm={len(segments.warm)} cold={len(segments.cold)}"
    )
    return segments
