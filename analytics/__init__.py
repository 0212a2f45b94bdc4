"""
Analytics Module for Booth Leads.

Booth dashboard aggregates and the foot traffic counter.
"""

from .booth_metrics import (
    BoothMetrics,
    Demographics,
    HeatmapZone,
    HourlyData,
    average_per_active_hour,
    calculate_booth_metrics,
    calculate_trends,
    conversion_rate,
    demographics,
    heatmap,
    heatmap_intensities,
    hourly_data,
    peak_hour,
)
from .foot_traffic import (
    DailyTotal,
    FootTrafficCounter,
    FootTrafficEntry,
    FootTrafficMetrics,
    calculate_foot_traffic_metrics,
    daily_totals,
    foot_traffic_by_section,
    hourly_foot_traffic,
)

__all__ = [
    "BoothMetrics",
    "Demographics",
    "HeatmapZone",
    "HourlyData",
    "average_per_active_hour",
    "calculate_booth_metrics",
    "calculate_trends",
    "conversion_rate",
    "demographics",
    "heatmap",
    "heatmap_intensities",
    "hourly_data",
    "peak_hour",
    "DailyTotal",
    "FootTrafficCounter",
    "FootTrafficEntry",
    "FootTrafficMetrics",
    "calculate_foot_traffic_metrics",
    "daily_totals",
    "foot_traffic_by_section",
    "hourly_foot_traffic",
]
