"""
Storage Module for Booth Leads.
"""

from .lead_store import LeadStore, InMemoryLeadStore, JsonFileLeadStore

__all__ = ["LeadStore", "InMemoryLeadStore", "JsonFileLeadStore"]
