"""
API Module for Booth Leads.

FastAPI application with routes for:
- Lead capture, scoring and segmentation
- Booth analytics and foot traffic
- CRM sync, AI insights and export
"""

from .main import create_app, app

__all__ = ["create_app", "app"]
