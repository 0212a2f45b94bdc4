"""Tests for lead segmentation."""

from datetime import datetime, timedelta, timezone

import pytest
from lead_scoring.catalog import Brand, Category
from lead_scoring.lead import Lead
from lead_scoring.scoring_model import EngagementLevel, LeadScorer
from lead_scoring.segmentation import segment_leads


def make_lead(lead_id, minutes=0, **values):
    return Lead(
        id=lead_id,
        timestamp=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc) + timedelta(minutes=minutes),
        **values,
    )


@pytest.fixture
def leads():
    hot = make_lead(
        "hot",
        business_type="wholesale",
        email="a@b.com",
        phone="5551112222",
        business_name="Cloud Nine",
        address="1 Main St",
        city="Austin",
        state="TX",
        selected_brands=["beri", "raz", "ryl"],
        selected_categories=["vapes", "hemp", "devices"],
        dwell_time=600,
        notes="n" * 60,
    )
    warm = make_lead(
        "warm",
        minutes=5,
        business_type="retail",
        email="c@d.com",
        phone="5553334444",
        selected_brands=["raz", "lost-mary"],
        selected_categories=["vapes", "smoke-shop"],
        dwell_time=300,
    )
    cold = make_lead("cold", minutes=10, selected_brands=["raz"])
    return [hot, warm, cold]


def test_empty_input():
    segments = segment_leads([])
    assert segments.hot == segments.warm == segments.cold == []
    assert all(bucket == [] for bucket in segments.by_grade.values())
    assert set(segments.by_category) == {c.value for c in Category}
    assert set(segments.by_brand) == {b.value for b in Brand}
    assert all(bucket == [] for bucket in segments.by_brand.values())
    assert set(segments.by_business_type) == {"wholesale", "retail"}


def test_engagement_partition(leads):
    segments = segment_leads(leads)
    assert [l.id for l in segments.hot] == ["hot"]
    assert [l.id for l in segments.warm] == ["warm"]
    assert [l.id for l in segments.cold] == ["cold"]
    assert sum(len(b) for b in segments.by_grade.values()) == len(leads)


def test_buckets_match_scores(leads):
    scorer = LeadScorer()
    segments = segment_leads(leads, scorer)
    for lead in leads:
        score = scorer.score(lead)
        assert segments.scores[lead.id] == score
        assert lead in segments.by_grade[score.grade.value]
        assert lead in segments.by_engagement(score.engagement_level)


def test_unset_business_type_not_bucketed(leads):
    segments = segment_leads(leads)
    assert [l.id for l in segments.by_business_type["wholesale"]] == ["hot"]
    assert [l.id for l in segments.by_business_type["retail"]] == ["warm"]


def test_lead_in_every_selected_bucket():
    lead = make_lead("x", selected_brands=["beri", "raz"])
    segments = segment_leads([lead])
    assert segments.by_brand["beri"] == [lead]
    assert segments.by_brand["raz"] == [lead]
    assert all(segments.by_category[c.value] == [] for c in Category)


def test_input_order_preserved(leads):
    segments = segment_leads(list(reversed(leads)))
    assert [l.id for l in segments.by_brand["raz"]] == ["cold", "warm", "hot"]


def test_unknown_ids_scored_but_not_bucketed():
    lead = make_lead("x", selected_brands=["beri", "mystery-brand"])
    segments = segment_leads([lead])
    assert "mystery-brand" not in segments.by_brand
    assert segments.by_brand["beri"] == [lead]
    brand_factor = next(f for f in segments.scores["x"].factors if f.name == "Brand Interest")
    assert brand_factor.points == 8


def test_buckets_hold_original_objects(leads):
    segments = segment_leads(leads)
    assert segments.hot[0] is leads[0]


def test_counts(leads):
    counts = segment_leads(leads).counts()
    assert counts["engagement"] == {"hot": 1, "warm": 1, "cold": 1}
    assert counts["brand"]["raz"] == 3
    assert counts["category"]["vapes"] == 2
    assert counts["business_type"] == {"wholesale": 1, "retail": 1}


def test_by_engagement_accepts_value():
    segments = segment_leads([make_lead("x")])
    assert segments.by_engagement("cold") is segments.by_engagement(EngagementLevel.COLD)


class CountingScorer(LeadScorer):
    def __init__(self):
        self.calls = []

    def score(self, lead):
        self.calls.append(lead.id)
        return super().score(lead)


def test_each_lead_scored_once(leads):
    scorer = CountingScorer()
    segment_leads(leads, scorer)
    assert scorer.calls == [l.id for l in leads]


def test_duplicate_ids_logged(caplog):
    first = make_lead("dup", business_type="wholesale")
    second = make_lead("dup", minutes=5)
    with caplog.at_level("WARNING", logger="lead_scoring.segmentation"):
        segments = segment_leads([first, second])
    assert "Duplicate lead id 'dup'" in caplog.text
    assert segments.scores["dup"] == LeadScorer().score(second)
    assert segments.cold == [first, second]
