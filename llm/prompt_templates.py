"""
Prompt templates for AI-generated lead insights.
"""

from enum import Enum


class PromptType(Enum):
    """Types of prompts."""
    LEAD_INSIGHT = "lead_insight"


class PromptTemplates:
    """
    Prompts for the insight generator.

    Written for a distributor selling vape products, smoke shop items and
    convenience store items at trade shows.
    """

    SYSTEM_PROMPTS = {
        PromptType.LEAD_INSIGHT: """You are a helpful sales assistant for {company_name}, a distribution company that sells vape products, smoke shop items, and convenience store items.

Analyze customer preferences and provide brief, actionable insights for the sales team.
Keep responses concise (2-3 paragraphs max).""",
    }

    USER_TEMPLATES = {
        PromptType.LEAD_INSIGHT: """Analyze this trade show lead and provide insights:

Business Type: {business_type}
Business Name: {business_name}
Location: {location}
Interested Brands: {brands}
Interested Categories: {categories}
Customer Notes: {notes}

Provide:
1. A brief customer profile summary
2. Recommended products/promotions to highlight
3. Best follow-up approach based on their preferences""",
    }

    @classmethod
    def get_system_prompt(
        cls,
        prompt_type: PromptType = PromptType.LEAD_INSIGHT,
        company_name: str = "our company",
    ) -> str:
        """System prompt for a prompt type, with the selling company filled in."""
        return cls.SYSTEM_PROMPTS[prompt_type].format(company_name=company_name)

    @classmethod
    def get_user_prompt(cls, prompt_type: PromptType, **kwargs) -> str:
        """
        Get formatted user prompt.

        Args:
            prompt_type: Type of prompt
            **kwargs: Template variables

        Returns:
            Formatted user prompt
        """
        return cls.USER_TEMPLATES[prompt_type].format(**kwargs)
