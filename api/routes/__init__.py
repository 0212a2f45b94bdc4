"""
API Routes for Booth Leads.
"""

from . import leads, analytics, foot_traffic, crm, insights, export

__all__ = ["leads", "analytics", "foot_traffic", "crm", "insights", "export"]
