"""
Narrative Generator.

Produces the human-readable explanation for a tender analysis. When an LLM
is configured, it asks for a short (3-5 sentence) narrative; otherwise, or
when that call fails in any way, it returns the risk engine's own summary.

The outcome is always a NarrativeResult whose `source` says which path
produced the text, so callers never have to catch anything.

Example:
    generator = NarrativeGenerator(llm=get_llm(settings.narrative_temperature))
    result = await generator.narrate(tender, assessment, now)
    if result.source == "local":
        ...
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

from analyzers.tender_risk_engine import RiskAssessment, Tender
from app.core.config import settings
from app.core.exceptions import LLMInvocationError
from app.core.logging import AnalysisLogger
from app.prompts import build_tender_messages
from app.services.llm_client import LLMProtocol, complete_chat

NarrativeSource = Literal["ai", "local"]


class NarrativeResult(BaseModel):
    """Narrative text tagged with the path that produced it."""

    text: str = Field(description="Narrative shown to the user.")
    source: NarrativeSource = Field(description="'ai' for an LLM narrative, 'local' for the rule summary.")
    error: Optional[str] = Field(default=None, description="Why the AI path was abandoned, if it was.")


class NarrativeGenerator:
    """
    AI-backed narrative with deterministic local fallback.

    Attributes:
        llm: Chat model, or None for local-only mode.
        timeout_seconds: Upper bound for the single outbound call.
    """

    def __init__(
        self,
        llm: Optional[LLMProtocol],
        timeout_seconds: float = settings.llm_timeout_seconds,
        logger: Optional[AnalysisLogger] = None,
    ) -> None:
        self.llm = llm
        self.timeout_seconds = timeout_seconds
        self._logger = logger or AnalysisLogger("narrative")

    @property
    def ai_enabled(self) -> bool:
        return self.llm is not None

    async def narrate(
        self,
        tender: Tender,
        assessment: RiskAssessment,
        now: Optional[datetime] = None,
    ) -> NarrativeResult:
        """
        Build the narrative for an already evaluated tender.

        Args:
            tender: The tender that was scored.
            assessment: Local rule engine output; its summary is the fallback.
            now: Reference date mentioned in the prompt (defaults to UTC now).

        Returns:
            NarrativeResult with source 'ai' or 'local'. Never raises.
        """
        if self.llm is None:
            self._logger.step("narrative", "No LLM configured, using local summary")
            return NarrativeResult(text=assessment.summary, source="local")

        system_prompt, user_message = build_tender_messages(tender, now or datetime.now(timezone.utc))

        try:
            text = await complete_chat(self.llm, system_prompt, user_message, self.timeout_seconds)
        except LLMInvocationError as e:
            self._logger.fallback("narrative", str(e))
            return NarrativeResult(text=assessment.summary, source="local", error=e.message)

        self._logger.step("narrative", f"AI narrative received ({len(text)} chars)")
        return NarrativeResult(text=text, source="ai")
