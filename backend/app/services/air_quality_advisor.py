"""
Air-quality advisor.

Answers residents' questions about current air quality using the LLM,
with the live station data embedded in the prompt. Unlike the tender
narrative there is no local fallback: without an LLM the feature is
unavailable and the route reports it.
"""

from typing import Any, Optional

from app.core.config import settings
from app.core.exceptions import LLMNotConfiguredError
from app.core.logging import get_logger
from app.prompts import AIR_QUALITY_ANALYZE_QUESTION, AIR_QUALITY_SYSTEM_PROMPT, build_air_quality_question
from app.services.llm_client import LLMProtocol, complete_chat

logger = get_logger(__name__)


class AirQualityAdvisor:
    """Ecologist persona over the chat model."""

    def __init__(
        self,
        llm: Optional[LLMProtocol],
        timeout_seconds: float = settings.llm_timeout_seconds,
    ) -> None:
        self.llm = llm
        self.timeout_seconds = timeout_seconds

    async def ask(self, question: str, air_quality_context: Optional[Any] = None) -> str:
        """
        Answer a free-form question.

        Raises:
            LLMNotConfiguredError: No API key configured.
            LLMInvocationError: The provider call failed.
        """
        if self.llm is None:
            raise LLMNotConfiguredError()

        logger.info(f"[ADVISOR] Question: {question[:80]}{'...' if len(question) > 80 else ''}")
        user_message = build_air_quality_question(question, air_quality_context)
        return await complete_chat(self.llm, AIR_QUALITY_SYSTEM_PROMPT, user_message, self.timeout_seconds)

    async def analyze(self, air_quality_context: Optional[Any] = None) -> str:
        """Plain-language overview: is it safe to go outside, is a mask needed."""
        return await self.ask(AIR_QUALITY_ANALYZE_QUESTION, air_quality_context)
