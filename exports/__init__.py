"""
Export Module for Booth Leads.
"""

from .spreadsheet import (
    DAILY_COLUMNS,
    ENTRY_COLUMNS,
    HOURLY_COLUMNS,
    LEAD_COLUMNS,
    daily_totals_rows,
    email_summary,
    export_rows,
    foot_traffic_entry_rows,
    foot_traffic_summary_rows,
    format_dwell_time,
    hourly_breakdown_rows,
    write_csv,
)

__all__ = [
    "DAILY_COLUMNS",
    "ENTRY_COLUMNS",
    "HOURLY_COLUMNS",
    "LEAD_COLUMNS",
    "daily_totals_rows",
    "email_summary",
    "export_rows",
    "foot_traffic_entry_rows",
    "foot_traffic_summary_rows",
    "format_dwell_time",
    "hourly_breakdown_rows",
    "write_csv",
]
