"""
LLM Module for Booth Leads.

This module handles:
- LLM provider abstraction (OpenAI)
- Prompt template management
- Lead insight generation with a local fallback
"""

from .insights import InsightGenerator, LeadInsight, bulk_analysis, local_insights
from .prompt_templates import PromptTemplates, PromptType

__all__ = [
    "InsightGenerator",
    "LeadInsight",
    "bulk_analysis",
    "local_insights",
    "PromptTemplates",
    "PromptType",
]
