from functools import lru_cache

from langchain_groq import ChatGroq

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


@lru_cache
def get_llm(temperature: float = 0.7) -> ChatGroq | None:
    """
    Singleton factory for ChatGroq instances.

    Returns None when GROQ_API_KEY is not set; callers treat that as
    local-only mode rather than an error.

    Timeout policy:
    - request_timeout: settings.llm_timeout_seconds
    - max_retries: 0 (a failed call falls back to local rules immediately)
    """
    if not settings.groq_api_key:
        logger.info("GROQ_API_KEY not set, AI narrative disabled (local rules only)")
        return None

    logger.info(f"Initializing LLM: {settings.groq_model} (temp={temperature})")
    return ChatGroq(
        model=settings.groq_model,
        temperature=temperature,
        api_key=settings.groq_api_key,
        request_timeout=settings.llm_timeout_seconds,
        max_retries=0,
    )
