"""Tests for lead export."""

import csv
import io
from datetime import date, datetime, timezone

import pytest
from analytics.foot_traffic import FootTrafficEntry
from exports.spreadsheet import (
    LEAD_COLUMNS,
    daily_totals_rows,
    email_summary,
    export_rows,
    foot_traffic_entry_rows,
    foot_traffic_summary_rows,
    format_dwell_time,
    hourly_breakdown_rows,
    sanitize_cell,
    write_csv,
)


@pytest.mark.parametrize("seconds, text", [
    (None, ""), (0, ""), (45, "45s"), (185, "3m 5s"), (float("inf"), ""), (float("nan"), ""),
])
def test_format_dwell_time(seconds, text):
    assert format_dwell_time(seconds) == text


def test_sanitize_cell():
    assert sanitize_cell("=SUM(A1)") == "SUM(A1)"
    assert sanitize_cell("+-@cmd") == "cmd"
    assert sanitize_cell("plain") == "plain"
    assert sanitize_cell(42) == 42


def test_export_rows(sample_lead):
    [row] = export_rows([sample_lead])
    assert list(row) == LEAD_COLUMNS
    assert row["Date"] == "2024-03-01"
    assert row["Time"] == "10:15:00"
    assert row["Dwell Time"] == "4m 0s"
    assert row["Salesperson"] == "Amanda"
    assert row["Booth Section"] == "Beri Display"
    assert row["Interested Brands"] == "Beri, Raz"
    assert row["Interested Categories"] == "Vapes"
    assert (row["Lead Score"], row["Lead Grade"], row["Engagement Level"]) == (61, "B", "warm")


def test_write_csv(sample_lead):
    lead = sample_lead.with_updates(notes="=HYPERLINK(\"x\")")
    output = io.StringIO()
    write_csv(export_rows([lead]), output)

    output.seek(0)
    [row] = list(csv.DictReader(output))
    assert row["Notes"] == "HYPERLINK(\"x\")"
    assert row["Email"] == "dana@vapeco.com"


def test_email_summary(sample_lead, empty_lead):
    text = email_summary([sample_lead, empty_lead])
    assert text.startswith("Trade Show Lead Summary")
    assert "Total Leads: 2" in text
    assert "  - Beri: 1 leads" in text
    assert "1. Dana Reyes" in text
    assert "   Notes: None" in text


def test_foot_traffic_summary_rows(sample_lead):
    entries = [
        FootTrafficEntry(id="a", timestamp=datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc), count=4),
    ]
    rows = {r["Metric"]: r["Value"] for r in foot_traffic_summary_rows(
        entries, [sample_lead], date(2024, 3, 1)
    )}
    assert rows["Total Foot Traffic (Today)"] == 4
    assert rows["Leads Captured (Today)"] == 1
    assert rows["Conversion Rate"] == "25.00%"
    assert rows["Peak Hour"] == "10 AM"
    assert rows["Peak Hour Count"] == 4
    assert rows["Leads Captured (All Time)"] == 1
    assert rows["Conversion Rate (All Time)"] == "25.00%"


def test_foot_traffic_summary_without_traffic(sample_lead):
    rows = {r["Metric"]: r["Value"] for r in foot_traffic_summary_rows(
        [], [sample_lead], date(2024, 3, 1)
    )}
    assert rows["Conversion Rate"] == "0.00%"
    assert rows["Conversion Rate (All Time)"] == "N/A"
    assert rows["Peak Hour"] == "N/A"


def traffic(entry_id, hour, count, day=1, **values):
    return FootTrafficEntry(
        id=entry_id,
        timestamp=datetime(2024, 3, day, hour, 0, tzinfo=timezone.utc),
        count=count,
        **values,
    )


def test_hourly_breakdown_rows():
    entries = [traffic("a", 9, 1), traffic("b", 10, 3), traffic("c", 10, 9, day=2)]
    rows = hourly_breakdown_rows(entries, date(2024, 3, 1))
    assert len(rows) == 11
    assert rows[0] == {"Hour": "8 AM", "Visitor Count": 0, "Percentage": "0.0%"}
    assert rows[1] == {"Hour": "9 AM", "Visitor Count": 1, "Percentage": "25.0%"}
    assert rows[2] == {"Hour": "10 AM", "Visitor Count": 3, "Percentage": "75.0%"}

    empty = hourly_breakdown_rows(entries, date(2024, 3, 5))
    assert {r["Percentage"] for r in empty} == {"0%"}


def test_foot_traffic_entry_rows():
    entries = [
        traffic("a", 9, 2, booth_section="raz-display", notes="school group"),
        traffic("b", 13, 1),
    ]
    rows = foot_traffic_entry_rows(entries)
    assert rows[0] == {
        "ID": "a",
        "Date": "2024-03-01",
        "Time": "09:00:00",
        "Count": 2,
        "Booth Section": "Raz Display",
        "Notes": "school group",
    }
    assert rows[1]["Booth Section"] == "All Areas"
    assert rows[1]["Notes"] == ""


def test_daily_totals_rows(sample_lead):
    entries = [traffic("a", 9, 8), traffic("b", 9, 3, day=2)]
    rows = daily_totals_rows(entries, [sample_lead], None)
    assert rows == [
        {"Date": "2024-03-01", "Foot Traffic": 8, "Leads": 1, "Conversion Rate": "12.50%"},
        {"Date": "2024-03-02", "Foot Traffic": 3, "Leads": 0, "Conversion Rate": "0.00%"},
    ]
    lead_only = daily_totals_rows([], [sample_lead])
    assert lead_only == [
        {"Date": "2024-03-01", "Foot Traffic": 0, "Leads": 1, "Conversion Rate": "N/A"},
    ]
