"""
Companion Prompt Templates

System prompts, crisis addendum and canned fallback texts for the
AI companion chat and mood analytics.

CLINICAL_REVIEW_REQUIRED: All prompt and fallback texts.
SAFETY-CRITICAL: Every crisis-facing text must contain
CRISIS_LINE_DISCLOSURE verbatim.
"""

import json
from typing import Sequence

from heal.domain.models.chat import ChatTurn
from heal.domain.models.mood import MoodRecord


CRISIS_LINE_DISCLOSURE: str = (
    "If you're in crisis, please reach out to the 988 Suicide & Crisis Lifeline "
    "by calling or texting 988. You can also chat at 988lifeline.org"
)

COMPANION_SYSTEM_PROMPT: str = """You are Heal Here's AI Companion, a warm, empathetic, and supportive mental health assistant. Your role is to:

1. Listen actively and validate the user's feelings without judgment
2. Offer gentle, evidence-based coping strategies when appropriate
3. Encourage professional help when needed, while being supportive
4. Use calming, reassuring language that promotes emotional safety
5. Never diagnose conditions or replace professional mental health care
6. Recognize crisis situations and provide emergency resources (988 Suicide & Crisis Lifeline)

Guidelines:
- Be warm, patient, and understanding
- Use "I" statements and reflective listening
- Suggest breathing exercises, grounding techniques, or journaling when helpful
- Keep responses concise but meaningful (2-4 sentences typically)
- If someone mentions self-harm or suicide, always provide 988 crisis line info
- Celebrate small wins and progress

Remember: You're a supportive companion, not a replacement for therapy."""

CRISIS_PROMPT_ADDENDUM: str = f"""IMPORTANT: The user may be in crisis. Your response MUST:
1. First acknowledge their pain with deep empathy
2. Gently remind them they're not alone
3. Always include: "{CRISIS_LINE_DISCLOSURE}"
4. Offer a simple grounding exercise if appropriate
5. Never dismiss their feelings or offer toxic positivity"""

# Provider returned no text
EMPTY_REPLY: str = "I'm here to listen. Could you tell me more?"

FALLBACK_REPLY: str = (
    "I'm having a little trouble connecting right now, but I'm still here with you. "
    "Could you tell me more about what's on your mind?"
)

CRISIS_FALLBACK_REPLY: str = (
    "I'm really sorry you're going through this, and I want you to know you're not alone. "
    f"{CRISIS_LINE_DISCLOSURE}. "
    "If you can, try taking a slow breath with me: in for four counts, and out for four counts."
)

# Audit text recorded on every crisis alert
CRISIS_RESPONSE_GIVEN: str = "Crisis protocol activated"

MOOD_ANALYTICS_SYSTEM_PROMPT: str = (
    "You are a mood analytics expert. Provide brief, insightful analysis of mood "
    "patterns. Be encouraging and practical."
)

FALLBACK_INSIGHTS: str = (
    "Every check-in is a step toward understanding yourself better. "
    "Keep logging your mood, and be gentle with yourself along the way."
)


def build_companion_prompt(is_crisis: bool) -> str:
    """System instructions for a chat turn."""
    if is_crisis:
        return f"{COMPANION_SYSTEM_PROMPT}\n\n{CRISIS_PROMPT_ADDENDUM}"
    return COMPANION_SYSTEM_PROMPT


def render_transcript(history: Sequence[ChatTurn], message: str) -> str:
    """
    Render prior turns plus the new message as a role-prefixed transcript.

    Example:
        User: I had a rough day
        Companion: I'm sorry to hear that...
        User: <message>
    """
    lines = [f"{turn.speaker_label}: {turn.content}" for turn in history]
    lines.append(f"User: {message}")
    return "\n".join(lines)


def build_mood_insights_prompt(
    period: str,
    records: Sequence[MoodRecord],
    average_score: float,
    dominant_mood: str,
) -> str:
    """User content for the mood insights request."""
    data = json.dumps([record.to_prompt_dict() for record in records])
    return (
        f"Analyze this {period} mood data: {data}. "
        f"Average mood score: {average_score:.1f}/5. "
        f"Dominant mood: {dominant_mood}. "
        "Provide insights and one actionable suggestion."
    )
