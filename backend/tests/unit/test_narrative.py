"""
Unit tests for NarrativeGenerator and the chat-completion wrapper.

The generator must always produce text: the AI narrative when the call
succeeds, the rule engine's summary verbatim otherwise.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from langchain_core.messages import HumanMessage, SystemMessage

from analyzers.tender_risk_engine import TenderRiskEngine
from app.core.exceptions import LLMInvocationError
from app.services.llm_client import complete_chat
from app.services.narrative import NarrativeGenerator


@pytest.fixture
def tender(tender_factory):
    return tender_factory(
        title="Реконструкция моста",
        category="construction",
        category_name="Строительство",
        amount=2_500_000_000,
    )


@pytest.fixture
def assessment(tender, now):
    return TenderRiskEngine().evaluate(tender, now)


class TestNarrativeWithoutLLM:
    """Local-only mode."""

    @pytest.mark.asyncio
    async def test_returns_local_summary(self, tender, assessment, now, mock_logger):
        generator = NarrativeGenerator(llm=None, logger=mock_logger)

        result = await generator.narrate(tender, assessment, now)

        assert result.source == "local"
        assert result.text == assessment.summary
        assert result.error is None
        assert generator.ai_enabled is False
        mock_logger.step.assert_called_once()


class TestNarrativeWithLLM:
    """AI path and its fallbacks."""

    @pytest.mark.asyncio
    async def test_returns_ai_text(self, tender, assessment, now, mock_llm):
        mock_llm.ainvoke.return_value.content = "  Тендер несёт высокий сезонный риск.  "
        generator = NarrativeGenerator(llm=mock_llm)

        result = await generator.narrate(tender, assessment, now)

        assert result.source == "ai"
        assert result.text == "Тендер несёт высокий сезонный риск."
        mock_llm.ainvoke.assert_called_once()

    @pytest.mark.asyncio
    async def test_prompt_embeds_tender_fields(self, tender, assessment, now, mock_llm):
        generator = NarrativeGenerator(llm=mock_llm)

        await generator.narrate(tender, assessment, now)

        messages = mock_llm.ainvoke.call_args[0][0]
        assert isinstance(messages[0], SystemMessage)
        assert isinstance(messages[1], HumanMessage)
        assert "01.06.2026" in messages[0].content
        assert "Строительство" in messages[1].content
        assert "2.5 млрд ₸" in messages[1].content
        assert "Реконструкция моста" in messages[1].content

    @pytest.mark.asyncio
    async def test_provider_error_falls_back_to_summary(self, tender, assessment, now, mock_llm, mock_logger):
        mock_llm.ainvoke.side_effect = RuntimeError("502 Bad Gateway")
        generator = NarrativeGenerator(llm=mock_llm, logger=mock_logger)

        result = await generator.narrate(tender, assessment, now)

        assert result.source == "local"
        assert result.text == assessment.summary
        assert result.error == "[LLM] Provider call failed"
        mock_logger.fallback.assert_called_once()

    @pytest.mark.asyncio
    async def test_empty_completion_falls_back(self, tender, assessment, now, mock_llm):
        mock_llm.ainvoke.return_value.content = "   "
        generator = NarrativeGenerator(llm=mock_llm)

        result = await generator.narrate(tender, assessment, now)

        assert result.source == "local"
        assert result.text == assessment.summary

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, tender, assessment, now, mock_llm_response):
        async def _slow(_messages):
            await asyncio.sleep(1)
            return mock_llm_response("too late")

        llm = AsyncMock()
        llm.ainvoke.side_effect = _slow
        generator = NarrativeGenerator(llm=llm, timeout_seconds=0.01)

        result = await generator.narrate(tender, assessment, now)

        assert result.source == "local"
        assert result.text == assessment.summary
        assert "No response" in result.error


class TestCompleteChat:
    """Error conversion in the shared wrapper."""

    @pytest.mark.asyncio
    async def test_non_text_content_raises(self, mock_llm):
        mock_llm.ainvoke.return_value.content = ["not", "text"]

        with pytest.raises(LLMInvocationError):
            await complete_chat(mock_llm, "system", "user", timeout_seconds=5)

    @pytest.mark.asyncio
    async def test_cause_is_preserved(self, mock_llm):
        error = ConnectionError("network down")
        mock_llm.ainvoke.side_effect = error

        with pytest.raises(LLMInvocationError) as exc_info:
            await complete_chat(mock_llm, "system", "user", timeout_seconds=5)

        assert exc_info.value.__cause__ is error
        assert "ConnectionError" in exc_info.value.details
