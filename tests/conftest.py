"""Shared fixtures for Booth Leads tests."""

import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

# Ensure we use test settings
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("CRM_SIMULATED_DELAY", "0")
os.environ.setdefault("CRM_FAILURE_RATE", "0")
os.environ.setdefault("CRM_PLATFORM", "none")

from lead_scoring.lead import Lead  # noqa: E402


@pytest.fixture
def client():
    """Create a FastAPI test client backed by a fresh in-memory store."""
    from api.main import app
    from api.services import get_services
    from llm.insights import InsightGenerator

    services = get_services()
    services.reset()
    services.initialize()
    services.insight_generator = InsightGenerator(provider=None)
    return TestClient(app)


@pytest.fixture
def sample_lead():
    """Wholesale lead from the intake form with two brands and one category."""
    return Lead(
        id="lead-1",
        timestamp=datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc),
        booth_section="beri-display",
        salesperson="amanda",
        first_name="Dana",
        last_name="Reyes",
        email="dana@vapeco.com",
        phone="5551234567",
        business_name="Vape Co",
        business_type="wholesale",
        address="1 Main St",
        city="Austin",
        state="TX",
        zip_code="78701",
        selected_brands=["beri", "raz"],
        selected_categories=["vapes"],
        preferred_contact="email",
        notes="Interested in bulk pricing for three store locations.",
        dwell_time=240,
    )


@pytest.fixture
def empty_lead():
    """Lead with nothing filled in."""
    return Lead(id="lead-empty", timestamp=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def lead_payload():
    """Lead capture request body."""
    return {
        "booth_section": "raz-display",
        "salesperson": "amanda",
        "first_name": "Sam",
        "last_name": "Lee",
        "email": "sam@smokeshop.com",
        "phone": "5559876543",
        "business_name": "Smoke Shop LLC",
        "business_type": "retail",
        "selected_brands": ["raz", "lost-mary"],
        "selected_categories": ["vapes", "smoke-shop"],
        "notes": "Wants a follow-up next week",
        "dwell_time": 300,
    }
