"""
OpenAI chat completion provider for lead insights.
"""

import logging
from typing import Dict, List, Optional

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """
    Async OpenAI provider used by the insight generator.

    Only single-turn completions are needed: one system prompt describing
    the sales analyst role and one user prompt carrying the lead details.
    """

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_id: str = DEFAULT_MODEL,
        max_tokens: int = 500,
        temperature: float = 0.7,
        timeout: float = 30.0,
    ):
        """
        Args:
            api_key: OpenAI API key, falls back to OPENAI_API_KEY
            model_id: Chat model to call
            max_tokens: Completion length cap for one briefing
            temperature: Sampling temperature
            timeout: Per-request timeout in seconds
        """
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self.model_id = model_id
        self.max_tokens = max_tokens
        self.temperature = temperature

        logger.info(f"Insight model configured: {model_id} (timeout {timeout}s)")

    @staticmethod
    def _messages(prompt: str, system: Optional[str]) -> List[Dict[str, str]]:
        messages = [{"role": "system", "content": system}] if system else []
        messages.append({"role": "user", "content": prompt})
        return messages

    async def agenerate(self, prompt: str, system: Optional[str] = None) -> str:
        """Return the stripped completion text, or "" when the model sent none."""
        try:
            response = await self._client.chat.completions.create(
                model=self.model_id,
                messages=self._messages(prompt, system),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.error(f"Insight completion failed ({self.model_id}): {e}")
            raise

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()
