"""
Lead export for Booth Leads.

Flattens leads into spreadsheet rows annotated with score, grade and
engagement tier, writes them as CSV, and renders the plain-text summary
used for emailing the lead list.
"""

import csv
import logging
import math
from datetime import date, tzinfo
from typing import Any, Dict, List, Mapping, Optional, Sequence, TextIO

from analytics.booth_metrics import conversion_rate, local_time
from analytics.foot_traffic import (
    FootTrafficEntry,
    calculate_foot_traffic_metrics,
    daily_totals,
    hourly_foot_traffic,
)
from lead_scoring.catalog import (
    Brand,
    BusinessType,
    Category,
    booth_section_name,
    display_names,
    salesperson_name,
)
from lead_scoring.lead import Lead
from lead_scoring.scoring_model import LeadScore, LeadScorer

logger = logging.getLogger(__name__)

LEAD_COLUMNS = [
    "ID",
    "Date",
    "Time",
    "Dwell Time",
    "Salesperson",
    "Booth Section",
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Business Name",
    "Business Type",
    "Address",
    "City",
    "State",
    "ZIP Code",
    "Interested Brands",
    "Interested Categories",
    "Preferred Contact",
    "Best Time to Contact",
    "Notes",
    "AI Insights",
    "Lead Score",
    "Lead Grade",
    "Engagement Level",
]

# Leading characters that make spreadsheet apps evaluate a cell.
FORMULA_PREFIXES = {"=", "+", "-", "@", "\t", "\r"}


def format_dwell_time(seconds: Optional[float]) -> str:
    """Format dwell time as '3m 5s' or '45s'; empty when not tracked."""
    if not seconds or seconds <= 0 or not math.isfinite(seconds):
        return ""
    total = int(seconds)
    minutes, secs = divmod(total, 60)
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def sanitize_cell(value: Any, column: str = "unknown") -> Any:
    """Strip formula-triggering leading characters from text cells."""
    if not isinstance(value, str):
        return value
    text = value
    while text and text[0] in FORMULA_PREFIXES:
        text = text[1:]
    if text != value:
        logger.warning(f"CSV injection character(s) stripped from column '{column}'")
    return text


def export_rows(
    leads: Sequence[Lead],
    scores: Optional[Mapping[str, LeadScore]] = None,
    tz: Optional[tzinfo] = None,
) -> List[Dict[str, Any]]:
    """
    Flatten leads into export rows.

    Args:
        leads: Leads to export, in output order
        scores: Precomputed scores keyed by lead id
        tz: Event timezone for the Date and Time columns

    Returns:
        One dict per lead keyed by LEAD_COLUMNS
    """
    scorer = LeadScorer()
    rows = []
    for lead in leads:
        score = scores.get(lead.id) if scores else None
        score = score or scorer.score(lead)
        when = local_time(lead.timestamp, tz)
        rows.append({
            "ID": lead.id,
            "Date": when.date().isoformat(),
            "Time": when.strftime("%H:%M:%S"),
            "Dwell Time": format_dwell_time(lead.dwell_time),
            "Salesperson": salesperson_name(lead.salesperson),
            "Booth Section": booth_section_name(lead.booth_section),
            "First Name": lead.first_name,
            "Last Name": lead.last_name,
            "Email": lead.email,
            "Phone": lead.phone,
            "Business Name": lead.business_name,
            "Business Type": lead.business_type.value,
            "Address": lead.address,
            "City": lead.city,
            "State": lead.state,
            "ZIP Code": lead.zip_code,
            "Interested Brands": ", ".join(display_names(lead.selected_brands, Brand)),
            "Interested Categories": ", ".join(
                display_names(lead.selected_categories, Category)
            ),
            "Preferred Contact": lead.preferred_contact.value,
            "Best Time to Contact": lead.best_time_to_contact,
            "Notes": lead.notes,
            "AI Insights": lead.ai_insights,
            "Lead Score": score.total,
            "Lead Grade": score.grade.value,
            "Engagement Level": score.engagement_level.value,
        })
    return rows


def write_csv(rows: Sequence[Mapping[str, Any]], stream: TextIO, columns: Optional[List[str]] = None):
    """Write export rows to a text stream as CSV."""
    columns = columns or LEAD_COLUMNS
    writer = csv.DictWriter(stream, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({col: sanitize_cell(row.get(col, ""), col) for col in columns})


def email_summary(leads: Sequence[Lead]) -> str:
    """Plain-text lead summary for email."""
    lines = [
        "Trade Show Lead Summary",
        "========================",
        "",
        f"Total Leads: {len(leads)}",
        f"Wholesale: {sum(1 for l in leads if l.business_type == BusinessType.WHOLESALE)}",
        f"Retail: {sum(1 for l in leads if l.business_type == BusinessType.RETAIL)}",
        "",
        "Brand Interest:",
    ]
    lines += [
        f"  - {b.display_name}: {sum(1 for l in leads if b.value in l.selected_brands)} leads"
        for b in Brand
    ]
    lines += ["", "Category Interest:"]
    lines += [
        f"  - {c.display_name}: "
        f"{sum(1 for l in leads if c.value in l.selected_categories)} leads"
        for c in Category
    ]
    lines += ["", "Lead Details:"]

    for i, lead in enumerate(leads, 1):
        lines += [
            "",
            f"{i}. {lead.full_name}",
            f"   Salesperson: {salesperson_name(lead.salesperson) or 'N/A'}",
            f"   Booth Section: {booth_section_name(lead.booth_section) or 'N/A'}",
            f"   Business: {lead.business_name or 'N/A'} ({lead.business_type.value})",
            f"   Email: {lead.email}",
            f"   Phone: {lead.phone}",
            f"   Brands: {', '.join(display_names(lead.selected_brands, Brand))}",
            f"   Categories: {', '.join(display_names(lead.selected_categories, Category))}",
            f"   Contact Preference: {lead.preferred_contact.value} - "
            f"{lead.best_time_to_contact}",
            f"   Notes: {lead.notes or 'None'}",
        ]

    return "\n".join(lines)


HOURLY_COLUMNS = ["Hour", "Visitor Count", "Percentage"]
ENTRY_COLUMNS = ["ID", "Date", "Time", "Count", "Booth Section", "Notes"]
DAILY_COLUMNS = ["Date", "Foot Traffic", "Leads", "Conversion Rate"]


def _rate_or_na(converted: int, total: int) -> str:
    if total <= 0:
        return "N/A"
    return f"{conversion_rate(converted, total):.2f}%"


def foot_traffic_summary_rows(
    entries: Sequence[FootTrafficEntry],
    leads: Sequence[Lead],
    as_of: date,
    tz: Optional[tzinfo] = None,
) -> List[Dict[str, Any]]:
    """Metric/value rows for the foot traffic report."""
    metrics = calculate_foot_traffic_metrics(entries, leads, as_of, tz)
    today_leads = sum(1 for l in leads if local_time(l.timestamp, tz).date() == as_of)
    peak_count = max((h.count for h in metrics.hourly_data), default=0)
    return [
        {"Metric": "Report Date", "Value": as_of.isoformat()},
        {"Metric": "Total Foot Traffic (Today)", "Value": metrics.today_count},
        {"Metric": "Total Foot Traffic (All Time)", "Value": metrics.total_count},
        {"Metric": "Leads Captured (Today)", "Value": today_leads},
        {"Metric": "Conversion Rate", "Value": f"{metrics.conversion_rate:.2f}%"},
        {"Metric": "Peak Hour", "Value": metrics.peak_hour},
        {"Metric": "Peak Hour Count", "Value": peak_count},
        {"Metric": "Leads Captured (All Time)", "Value": len(leads)},
        {
            "Metric": "Conversion Rate (All Time)",
            "Value": _rate_or_na(len(leads), metrics.total_count),
        },
    ]


def hourly_breakdown_rows(
    entries: Sequence[FootTrafficEntry],
    as_of: date,
    tz: Optional[tzinfo] = None,
) -> List[Dict[str, Any]]:
    """Visitors per window hour on a show day, with each hour's share of the day."""
    today = [e for e in entries if local_time(e.timestamp, tz).date() == as_of]
    day_total = sum(e.count for e in today)
    rows = []
    for hour in hourly_foot_traffic(today, tz):
        share = f"{conversion_rate(hour.count, day_total):.1f}%" if day_total else "0%"
        rows.append({"Hour": hour.hour, "Visitor Count": hour.count, "Percentage": share})
    return rows


def foot_traffic_entry_rows(
    entries: Sequence[FootTrafficEntry],
    tz: Optional[tzinfo] = None,
) -> List[Dict[str, Any]]:
    """One row per logged entry; entries without a section cover all areas."""
    rows = []
    for entry in entries:
        when = local_time(entry.timestamp, tz)
        rows.append({
            "ID": entry.id,
            "Date": when.date().isoformat(),
            "Time": when.strftime("%H:%M:%S"),
            "Count": entry.count,
            "Booth Section": (
                booth_section_name(entry.booth_section) if entry.booth_section else "All Areas"
            ),
            "Notes": entry.notes or "",
        })
    return rows


def daily_totals_rows(
    entries: Sequence[FootTrafficEntry],
    leads: Sequence[Lead],
    tz: Optional[tzinfo] = None,
) -> List[Dict[str, Any]]:
    """Per-day foot traffic, leads and conversion rate, oldest day first."""
    return [
        {
            "Date": total.day.isoformat(),
            "Foot Traffic": total.foot_traffic,
            "Leads": total.leads,
            "Conversion Rate": _rate_or_na(total.leads, total.foot_traffic),
        }
        for total in daily_totals(entries, leads, tz)
    ]
