"""Tests for Lead Scoring components."""

from datetime import datetime, timezone

import pytest
from lead_scoring.catalog import Brand, BusinessType, display_names
from lead_scoring.lead import EnrichedLeadData, Lead
from lead_scoring.scoring_model import (
    EngagementLevel,
    LeadGrade,
    LeadScorer,
    engagement_for_score,
    grade_for_score,
    priority_actions,
)


@pytest.fixture
def scorer():
    return LeadScorer()


def make_lead(**values):
    values.setdefault("id", "lead-x")
    values.setdefault("timestamp", datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))
    return Lead(**values)


def factor(score, name):
    return next(f for f in score.factors if f.name == name)


# ── Lead record ───────────────────────────────────────

class TestLead:
    def test_from_dict_accepts_camel_case(self):
        lead = Lead.from_dict({
            "id": "abc",
            "timestamp": "2024-03-01T10:00:00.000Z",
            "firstName": "Ana",
            "businessType": "retail",
            "selectedBrands": ["raz", "raz", "beri"],
            "dwellTime": 90,
            "scoreBadge": "ignored",
        })
        assert lead.first_name == "Ana"
        assert lead.business_type == BusinessType.RETAIL
        assert lead.selected_brands == ("raz", "beri")
        assert lead.dwell_time == 90
        assert lead.timestamp.tzinfo is not None

    def test_from_dict_null_strings(self):
        lead = Lead.from_dict({"id": "abc", "timestamp": "2024-03-01T10:00:00Z", "email": None})
        assert lead.email == ""

    def test_invalid_timestamp(self):
        with pytest.raises(ValueError):
            make_lead(timestamp="yesterday")

    def test_with_updates_returns_copy(self, sample_lead):
        updated = sample_lead.with_updates(notes="Call Monday")
        assert updated.notes == "Call Monday"
        assert sample_lead.notes != "Call Monday"
        assert updated.id == sample_lead.id

    def test_with_updates_unknown_field(self, sample_lead):
        with pytest.raises(TypeError):
            sample_lead.with_updates(score=99)

    def test_to_dict_round_trip(self, sample_lead):
        enriched = sample_lead.with_updates(
            enriched_data=EnrichedLeadData(company_size="11-50", industry="Retail")
        )
        restored = Lead.from_dict(enriched.to_dict())
        assert restored == enriched

    def test_new_generates_id(self):
        a = Lead.new(first_name="A")
        b = Lead.new(first_name="B")
        assert a.id != b.id
        assert a.timestamp.tzinfo is not None


# ── Lead Scorer ───────────────────────────────────────

class TestLeadScorer:
    def test_complete_wholesale_lead(self, scorer):
        lead = make_lead(
            business_type="wholesale",
            email="a@b.com",
            phone="5551112222",
            business_name="Cloud Nine",
            address="1 Main St",
            city="Austin",
            state="TX",
            selected_brands=["beri", "raz", "ryl"],
            selected_categories=["vapes", "hemp"],
            dwell_time=185,
            notes="x" * 45,
        )
        result = scorer.score(lead)
        assert [f.points for f in result.factors] == [15, 20, 12, 8, 9, 2]
        assert result.total == 66
        assert result.grade == LeadGrade.B
        assert result.engagement_level == EngagementLevel.WARM

    def test_empty_lead(self, scorer, empty_lead):
        result = scorer.score(empty_lead)
        assert result.total == 5
        assert result.grade == LeadGrade.D
        assert result.engagement_level == EngagementLevel.COLD
        assert factor(result, "Booth Engagement").description == "Standard engagement"

    def test_factor_order_and_maxima(self, scorer, sample_lead):
        result = scorer.score(sample_lead)
        assert [(f.name, f.max_points) for f in result.factors] == [
            ("Business Type", 15),
            ("Contact Completeness", 20),
            ("Brand Interest", 20),
            ("Category Interest", 20),
            ("Booth Engagement", 15),
            ("Expressed Intent", 10),
        ]
        assert result.total == sum(f.points for f in result.factors)

    def test_retail_points(self, scorer):
        assert factor(scorer.score(make_lead(business_type="retail")), "Business Type").points == 10

    def test_partial_address_not_counted(self, scorer):
        lead = make_lead(address="1 Main St", city="Austin")
        assert factor(scorer.score(lead), "Contact Completeness").points == 0

    def test_interest_capped(self, scorer):
        lead = make_lead(selected_brands=[b.value for b in Brand])
        assert factor(scorer.score(lead), "Brand Interest").points == 20

    @pytest.mark.parametrize("dwell, points", [
        (None, 5),
        (0, 5),
        (59, 0),
        (60, 3),
        (185, 9),
        (299, 12),
        (3600, 15),
        (-120, 0),
        (float("nan"), 5),
        (float("inf"), 15),
        (float("-inf"), 0),
    ])
    def test_booth_engagement(self, scorer, dwell, points):
        lead = make_lead(dwell_time=dwell)
        assert factor(scorer.score(lead), "Booth Engagement").points == points

    @pytest.mark.parametrize("length, points", [(0, 0), (19, 0), (20, 1), (45, 2), (500, 10)])
    def test_expressed_intent(self, scorer, length, points):
        lead = make_lead(notes="n" * length)
        assert factor(scorer.score(lead), "Expressed Intent").points == points

    def test_non_finite_dwell_time(self, scorer, sample_lead):
        untracked = scorer.score(sample_lead.with_updates(dwell_time=float("nan")))
        assert factor(untracked, "Booth Engagement").description == "Standard engagement"

        capped = scorer.score(sample_lead.with_updates(dwell_time=float("inf")))
        assert factor(capped, "Booth Engagement").points == 15
        assert capped.total == scorer.score(sample_lead.with_updates(dwell_time=3600)).total

    def test_score_is_deterministic(self, scorer, sample_lead):
        assert scorer.score(sample_lead) == scorer.score(sample_lead)

    def test_score_range(self, scorer, sample_lead, empty_lead):
        for lead in (sample_lead, empty_lead):
            result = scorer.score(lead)
            assert 0 <= result.total <= 100


class TestBands:
    @pytest.mark.parametrize("total, grade", [
        (100, LeadGrade.A), (80, LeadGrade.A), (79, LeadGrade.B), (60, LeadGrade.B),
        (59, LeadGrade.C), (40, LeadGrade.C), (39, LeadGrade.D), (0, LeadGrade.D),
    ])
    def test_grade_boundaries(self, total, grade):
        assert grade_for_score(total) == grade

    @pytest.mark.parametrize("total, level", [
        (70, EngagementLevel.HOT), (69, EngagementLevel.WARM),
        (45, EngagementLevel.WARM), (44, EngagementLevel.COLD),
    ])
    def test_engagement_boundaries(self, total, level):
        assert engagement_for_score(total) == level

    def test_every_score_has_one_band(self):
        grade_floors = {LeadGrade.A: 80, LeadGrade.B: 60, LeadGrade.C: 40, LeadGrade.D: 0}
        level_floors = {EngagementLevel.HOT: 70, EngagementLevel.WARM: 45, EngagementLevel.COLD: 0}
        for total in range(0, 101):
            grade = grade_for_score(total)
            level = engagement_for_score(total)
            assert [g for g, floor in grade_floors.items() if floor <= total][0] == grade
            assert [l for l, floor in level_floors.items() if floor <= total][0] == level
            assert grade_for_score(grade_floors[grade]) == grade
            assert engagement_for_score(level_floors[level]) == level


# ── Priority actions ──────────────────────────────────

class TestPriorityActions:
    def test_grade_a_wholesale(self):
        lead = make_lead(
            business_type="wholesale",
            email="a@b.com",
            phone="5551112222",
            business_name="Cloud Nine",
            address="1 Main St",
            city="Austin",
            state="TX",
            selected_brands=["beri", "raz", "ryl", "one-tank"],
            selected_categories=["vapes", "hemp", "devices"],
            dwell_time=600,
            notes="n" * 200,
        )
        actions = priority_actions(lead)
        assert actions[:3] == [
            "High-priority follow-up within 24 hours",
            "Schedule discovery call",
            "Prepare volume pricing proposal",
        ]
        assert actions[-1] == "Highlight Beri, Raz, One Tank, RYL products"

    def test_grade_d(self, empty_lead):
        assert priority_actions(empty_lead) == ["Add to general mailing list"]

    def test_brand_names_follow_catalog_order(self):
        assert display_names(["ryl", "unknown", "beri"], Brand) == ["Beri", "RYL"]
