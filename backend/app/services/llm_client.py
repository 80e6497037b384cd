"""
Thin chat-completion wrapper shared by the narrative generator and the
air-quality advisor.

Any LLM object exposing `async ainvoke(messages)` works, which lets tests
inject an AsyncMock in place of ChatGroq.
"""

import asyncio
from typing import Any, List, Protocol, runtime_checkable

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from app.core.exceptions import LLMInvocationError


@runtime_checkable
class LLMProtocol(Protocol):
    """
    Protocol defining the interface for LLM services.

    The protocol is runtime_checkable to enable isinstance() checks.
    """

    async def ainvoke(self, messages: List[BaseMessage]) -> Any:
        """
        Asynchronously invoke the LLM with a list of messages.

        Returns:
            LLM response object with a `content` attribute.
        """
        ...


def model_name_of(llm: Any) -> str | None:
    """Best-effort model identifier for error messages."""
    name = getattr(llm, "model_name", None) or getattr(llm, "model", None)
    return name if isinstance(name, str) else None


async def complete_chat(
    llm: LLMProtocol,
    system_prompt: str,
    user_message: str,
    timeout_seconds: float,
) -> str:
    """
    Send a system + user message pair and return the completion text.

    Raises:
        LLMInvocationError: On timeout, provider error, or empty/non-text
            content. The underlying exception is kept as `__cause__`.
    """
    messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_message)]
    model_name = model_name_of(llm)

    try:
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        raise LLMInvocationError(
            f"No response within {timeout_seconds:g}s", model_name=model_name
        ) from e
    except Exception as e:
        raise LLMInvocationError(
            "Provider call failed",
            model_name=model_name,
            details=f"{type(e).__name__}: {str(e)[:200]}",
        ) from e

    content = getattr(response, "content", None)
    if not isinstance(content, str) or not content.strip():
        raise LLMInvocationError("Empty or malformed completion", model_name=model_name)

    return content.strip()
