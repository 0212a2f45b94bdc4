"""
AI insight generation for Booth Leads.

Asks the configured LLM for a short sales briefing on a lead. When no
provider is configured, or the call fails, a templated local analysis is
returned instead so the caller always gets usable text.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from analytics.booth_metrics import round_half_up
from lead_scoring.catalog import Brand, BusinessType, Category, display_names
from lead_scoring.lead import Lead

from .prompt_templates import PromptTemplates, PromptType

logger = logging.getLogger(__name__)


class TextProvider(Protocol):
    """Anything that can complete a prompt asynchronously."""

    async def agenerate(self, prompt: str, system: Optional[str] = None) -> str:
        ...


@dataclass
class LeadInsight:
    """Generated insight text and where it came from."""
    text: str
    source: str  # "llm" or "local"

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "source": self.source}


def _lead_context(lead: Lead) -> Dict[str, Any]:
    return {
        "business_type": lead.business_type.value,
        "business_name": lead.business_name,
        "location": f"{lead.city}, {lead.state}",
        "brands": display_names(lead.selected_brands, Brand),
        "categories": display_names(lead.selected_categories, Category),
        "notes": lead.notes,
    }


# Category display name -> focus phrase, in presentation order.
_CATEGORY_FOCUS = [
    (("Vapes", "Devices"), "core vaping products"),
    (("Vape Juice",), "e-liquid variety"),
    (("Hemp Products",), "hemp/CBD offerings"),
    (("Smoke Shop Items",), "smoke accessories"),
    (("Convenience Store Items",), "convenience items for broader inventory"),
]


def local_insights(lead: Lead) -> str:
    """Templated lead analysis used when no LLM answer is available."""
    context = _lead_context(lead)
    insights: List[str] = []

    if context["business_type"] == BusinessType.WHOLESALE.value:
        profile = "a wholesale buyer likely looking for bulk pricing and consistent supply"
    else:
        profile = "a retail customer focused on variety and trending products"
    business = f" from {context['business_name']}" if context["business_name"] else ""
    location = f" in {context['location']}" if context["location"] != ", " else ""
    insights.append(f"Customer Profile: This is {profile}{business}{location}.")

    brands = context["brands"]
    if brands:
        if len(brands) >= 4:
            brand_insight = (
                "Shows strong interest across multiple brands - potential high-volume customer"
            )
        else:
            brand_insight = (
                f"Focused interest in {' and '.join(brands)} - "
                "highlight latest products from these brands"
            )
        insights.append(f"Brand Preference: {brand_insight}.")

    categories = context["categories"]
    if categories:
        focus = [
            phrase for names, phrase in _CATEGORY_FOCUS
            if any(name in categories for name in names)
        ]
        closing = (
            "Consider presenting a comprehensive catalog."
            if len(categories) >= 4
            else "Prioritize these categories in follow-up."
        )
        insights.append(f"Product Focus: Customer interested in {', '.join(focus)}. {closing}")

    if context["business_type"] == BusinessType.WHOLESALE.value:
        follow_up = (
            "Schedule a call to discuss volume pricing, payment terms, and delivery "
            "schedules. Prepare wholesale catalog and MOQ information."
        )
    else:
        follow_up = (
            "Send product recommendations with retail pricing. Include any current "
            "promotions or new arrivals."
        )
    insights.append(f"Follow-up Action: {follow_up}")

    if context["notes"] and len(context["notes"]) > 20:
        insights.append(
            "Special Note: Customer provided detailed notes - review carefully for "
            "specific requirements or questions that need addressing."
        )

    return "\n\n".join(insights)


class InsightGenerator:
    """
    Generates sales insights for captured leads.

    Falls back to `local_insights` whenever the provider is missing or fails.
    """

    def __init__(self, provider: Optional[TextProvider] = None, company_name: str = "our company"):
        self.provider = provider
        self.company_name = company_name
        if provider is None:
            logger.warning("No LLM provider configured, using local insights")

    async def generate(self, lead: Lead) -> LeadInsight:
        """
        Generate an insight for a lead.

        Args:
            lead: Lead to analyze

        Returns:
            LeadInsight; never raises on provider errors
        """
        if self.provider is not None:
            context = _lead_context(lead)
            prompt = PromptTemplates.get_user_prompt(
                PromptType.LEAD_INSIGHT,
                business_type=context["business_type"],
                business_name=context["business_name"] or "Not provided",
                location=context["location"],
                brands=", ".join(context["brands"]),
                categories=", ".join(context["categories"]),
                notes=context["notes"] or "None",
            )
            system = PromptTemplates.get_system_prompt(
                PromptType.LEAD_INSIGHT, company_name=self.company_name
            )
            try:
                text = await self.provider.agenerate(prompt, system=system)
                if text:
                    return LeadInsight(text=text, source="llm")
                logger.warning(f"Empty LLM insight for lead {lead.id}, using local insights")
            except Exception as e:
                logger.error(f"LLM insight failed for lead {lead.id}: {e}")

        return LeadInsight(text=local_insights(lead), source="local")


def _percent(count: int, total: int) -> int:
    return round_half_up(count / total * 100)


def bulk_analysis(leads: Sequence[Lead]) -> str:
    """Templated summary across all captured leads."""
    if not leads:
        return "No leads to analyze."

    total = len(leads)
    wholesale = sum(1 for l in leads if l.business_type == BusinessType.WHOLESALE)
    retail = sum(1 for l in leads if l.business_type == BusinessType.RETAIL)

    brand_popularity = sorted(
        [(b.display_name, sum(1 for l in leads if b.value in l.selected_brands)) for b in Brand],
        key=lambda item: item[1],
        reverse=True,
    )
    category_popularity = sorted(
        [
            (c.display_name, sum(1 for l in leads if c.value in l.selected_categories))
            for c in Category
        ],
        key=lambda item: item[1],
        reverse=True,
    )
    states: Dict[str, int] = {}
    for lead in leads:
        if lead.state:
            states[lead.state] = states.get(lead.state, 0) + 1

    top_brands = brand_popularity[:3]
    top_categories = category_popularity[:3]
    top_states = sorted(states.items(), key=lambda item: item[1], reverse=True)[:3]

    lines = [
        "Lead Analysis Summary",
        "",
        "Overview",
        f"• Total Leads: {total}",
        f"• Wholesale: {wholesale} ({_percent(wholesale, total)}%)",
        f"• Retail: {retail} ({_percent(retail, total)}%)",
        "",
        "Top Brands",
    ]
    lines += [
        f"{i}. {name} - {count} leads ({_percent(count, total)}%)"
        for i, (name, count) in enumerate(top_brands, 1)
    ]
    lines += ["", "Top Categories"]
    lines += [
        f"{i}. {name} - {count} leads ({_percent(count, total)}%)"
        for i, (name, count) in enumerate(top_categories, 1)
    ]
    lines += ["", "Geographic Distribution"]
    if top_states:
        lines += [f"• {state}: {count} leads" for state, count in top_states]
    else:
        lines.append("No location data available")

    lines += ["", "Recommendations"]
    if wholesale > retail:
        lines.append("• Focus on B2B outreach and volume pricing discussions")
        lines.append("• Prepare wholesale catalogs and MOQ sheets")
    else:
        lines.append("• Emphasize retail promotions and product variety")
        lines.append("• Consider loyalty programs for repeat customers")
    if top_brands[0][1] > total * 0.5:
        lines.append(
            f"• {top_brands[0][0]} is a clear favorite - ensure adequate inventory "
            "and highlight new releases"
        )
    if top_categories[0][1] > total * 0.5:
        lines.append(
            f"• Strong demand for {top_categories[0][0]} - consider featured promotions "
            "in this category"
        )

    return "\n".join(lines)
