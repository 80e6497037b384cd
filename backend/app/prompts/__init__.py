"""
Prompts module initialization.

Exports the prompt constants and builders used by the narrative generator
and the air-quality advisor.
"""

from app.prompts.analysis_prompts import (
    # Prompts
    AIR_QUALITY_ANALYZE_QUESTION,
    AIR_QUALITY_SYSTEM_PROMPT,
    TENDER_SYSTEM_PROMPT,
    TENDER_USER_PROMPT,
    # Helper functions
    build_air_quality_question,
    build_tender_messages,
)

__all__ = [
    # Prompts
    "AIR_QUALITY_ANALYZE_QUESTION",
    "AIR_QUALITY_SYSTEM_PROMPT",
    "TENDER_SYSTEM_PROMPT",
    "TENDER_USER_PROMPT",
    # Helper functions
    "build_air_quality_question",
    "build_tender_messages",
]
