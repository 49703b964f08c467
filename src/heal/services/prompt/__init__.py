"""Prompt templates and canned fallback texts."""

from heal.services.prompt.companion_prompts import (
    COMPANION_SYSTEM_PROMPT,
    CRISIS_FALLBACK_REPLY,
    CRISIS_LINE_DISCLOSURE,
    FALLBACK_INSIGHTS,
    FALLBACK_REPLY,
    build_companion_prompt,
    render_transcript,
)

__all__ = [
    "COMPANION_SYSTEM_PROMPT",
    "CRISIS_FALLBACK_REPLY",
    "CRISIS_LINE_DISCLOSURE",
    "FALLBACK_INSIGHTS",
    "FALLBACK_REPLY",
    "build_companion_prompt",
    "render_transcript",
]
