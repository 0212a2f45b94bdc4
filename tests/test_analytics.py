"""Tests for booth analytics."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from analytics.booth_metrics import (
    BoothMetrics,
    HourCount,
    average_per_active_hour,
    calculate_booth_metrics,
    calculate_trends,
    conversion_rate,
    demographics,
    format_hour,
    heatmap,
    heatmap_intensities,
    hourly_data,
    local_time,
    peak_hour,
    round_half_up,
)
from lead_scoring.lead import Lead


def make_lead(lead_id, hour, **values):
    return Lead(
        id=lead_id,
        timestamp=datetime(2024, 3, 1, hour, 30, tzinfo=timezone.utc),
        **values,
    )


HOT = dict(
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


# ── Helpers ───────────────────────────────────────────

class TestHelpers:
    def test_heatmap_intensities(self):
        assert heatmap_intensities([0, 5, 10]) == [0, 50, 100]

    def test_heatmap_intensities_all_zero(self):
        assert heatmap_intensities([0, 0, 0]) == [0, 0, 0]

    def test_peak_hour_tie_goes_to_earlier_hour(self):
        hours = [HourCount(format_hour(h), h, c) for h, c in [(9, 2), (10, 4), (11, 4)]]
        assert peak_hour(hours).hour_num == 10

    def test_peak_hour_empty(self):
        assert peak_hour([HourCount("9 AM", 9, 0)]) is None

    def test_average_per_active_hour(self):
        assert average_per_active_hour([0, 4, 0, 6, 0]) == 5
        assert average_per_active_hour([0, 0]) == 0

    def test_conversion_rate_zero_denominator(self):
        assert conversion_rate(3, 0) == 0.0
        assert conversion_rate(1, 4) == 25.0

    @pytest.mark.parametrize("value, expected", [(2.5, 3), (2.4, 2), (-0.5, 0), (0.5, 1)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("hour, label", [(0, "12 AM"), (9, "9 AM"), (12, "12 PM"), (17, "5 PM")])
    def test_format_hour(self, hour, label):
        assert format_hour(hour) == label

    def test_local_time(self):
        ts = datetime(2024, 3, 1, 15, 0, tzinfo=timezone.utc)
        assert local_time(ts, ZoneInfo("America/Chicago")).hour == 9
        naive = datetime(2024, 3, 1, 15, 0)
        assert local_time(naive, ZoneInfo("America/Chicago")) == naive


# ── Booth metrics ─────────────────────────────────────

class TestBoothMetrics:
    def test_empty(self):
        metrics = calculate_booth_metrics([])
        assert metrics.total_visitors == 0
        assert metrics.peak_hour == "N/A"
        assert metrics.bounce_rate == 0.0
        assert metrics.conversion_rate == 0.0
        assert metrics.average_dwell_time == 0.0

    def test_counts_and_rates(self):
        leads = [
            make_lead("1", 10, **HOT),
            make_lead("2", 10, dwell_time=120),
            make_lead("3", 14),
            make_lead("4", 14),
        ]
        metrics = calculate_booth_metrics(leads)
        assert metrics.total_visitors == 4
        assert (metrics.hot_leads, metrics.warm_leads, metrics.cold_leads) == (1, 0, 3)
        assert metrics.qualified_leads == 1
        assert metrics.bounce_rate == 15.0
        assert metrics.conversion_rate == 25.0
        assert metrics.average_dwell_time == 360.0
        # 10 AM and 2 PM tie; the earlier hour wins.
        assert metrics.peak_hour == "10 AM"

    def test_bounce_rate_floor(self):
        leads = [make_lead(str(i), 10, **HOT) for i in range(3)]
        assert calculate_booth_metrics(leads).bounce_rate == 5.0

    def test_non_finite_dwell_ignored(self):
        leads = [
            make_lead("1", 10, dwell_time=120),
            make_lead("2", 10, dwell_time=float("inf")),
            make_lead("3", 11, dwell_time=float("nan")),
        ]
        metrics = calculate_booth_metrics(leads)
        assert metrics.total_visitors == 3
        assert metrics.average_dwell_time == 120.0
        assert [h.avg_dwell for h in hourly_data(leads) if h.leads] == [120, 0]

    def test_timezone_shifts_peak(self):
        leads = [make_lead("1", 15)]
        metrics = calculate_booth_metrics(leads, tz=ZoneInfo("America/Chicago"))
        assert metrics.peak_hour == "9 AM"


class TestHourlyData:
    def test_show_hours(self):
        rows = hourly_data([make_lead("1", 9, dwell_time=90), make_lead("2", 9), make_lead("3", 20)])
        assert [r.hour for r in rows][0] == "9 AM"
        assert [r.hour for r in rows][-1] == "5 PM"
        assert len(rows) == 9
        assert rows[0].leads == 2
        assert rows[0].avg_dwell == 90
        assert sum(r.leads for r in rows) == 2


class TestDemographics:
    def test_percentages(self):
        leads = [
            make_lead("1", 10, business_type="wholesale", selected_brands=["raz"]),
            make_lead("2", 10, business_type="retail", selected_brands=["raz", "beri"]),
            make_lead("3", 10, preferred_contact="email"),
            make_lead("4", 10),
        ]
        result = demographics(leads)
        assert [(d.category, d.value, d.percentage) for d in result.business_type] == [
            ("Wholesale", 1, 25.0),
            ("Retail", 1, 25.0),
        ]
        assert result.brands[0].category == "Raz"
        assert result.brands[0].percentage == 50.0
        email = next(d for d in result.contact_preference if d.category == "Email")
        assert email.value == 1

    def test_empty(self):
        result = demographics([])
        assert all(d.percentage == 0 for d in result.brands)


class TestHeatmap:
    def test_zones(self):
        leads = [
            make_lead("1", 10, booth_section="beri-display", dwell_time=120),
            make_lead("2", 10, booth_section="beri-display", dwell_time=60),
            make_lead("3", 10, booth_section="raz-display"),
            make_lead("4", 10),
        ]
        zones = {z.id: z for z in heatmap(leads)}
        assert zones["beri-display"].intensity == 100
        assert zones["beri-display"].visitors == 2
        assert zones["beri-display"].avg_dwell == 90
        assert zones["raz-display"].intensity == 50
        assert zones["ryl-display"].intensity == 0
        assert zones["beri-display"].name == "Beri Display"

    def test_empty(self):
        assert all(z.intensity == 0 for z in heatmap([]))


# ── Trends ────────────────────────────────────────────

def metrics(**values):
    base = dict(
        total_visitors=10,
        unique_visitors=10,
        average_dwell_time=120.0,
        bounce_rate=20.0,
        peak_hour="10 AM",
        conversion_rate=50.0,
        qualified_leads=5,
        hot_leads=2,
        warm_leads=3,
        cold_leads=5,
    )
    base.update(values)
    return BoothMetrics(**base)


class TestTrends:
    def test_no_previous_period(self):
        trends = calculate_trends(metrics())
        assert all(t["trend"] == "neutral" for t in trends.values())
        assert trends["visitors"]["value"] == 10

    def test_directions(self):
        trends = calculate_trends(
            metrics(total_visitors=12, average_dwell_time=121.0, bounce_rate=10.0, conversion_rate=40.0),
            metrics(),
        )
        assert trends["visitors"]["trend"] == "up"
        assert trends["visitors"]["percentage"] == pytest.approx(20.0)
        assert trends["dwell_time"]["trend"] == "neutral"
        assert trends["bounce_rate"]["trend"] == "up"
        assert trends["conversion"]["trend"] == "down"

    def test_zero_previous_is_neutral(self):
        trends = calculate_trends(metrics(total_visitors=5), metrics(total_visitors=0))
        assert trends["visitors"] == {"value": 5, "trend": "neutral", "percentage": 0.0}


def test_peak_hour_outside_show_hours():
    assert calculate_booth_metrics([make_lead("late", 22)]).peak_hour == "10 PM"
