"""
Wellness Coach

Single-shot AI wellness tools: CBT thought reframing, grounding
exercises, journal insights, routine generation, daily affirmations,
mood and progress insights, habit coaching, therapy session summaries
and community content moderation.

Unlike the companion chat these tools have no canned fallback:
ProviderUnavailableError and ExhaustedRetriesError propagate to the
caller, which reports the tool as temporarily unavailable.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from heal.config.logging_config import get_logger
from heal.domain.models.mood import MoodRecord
from heal.services.llm.completion_client import ResilientCompletionClient
from heal.services.prompt.wellness_prompts import (
    AFFIRMATION_PROMPT,
    ANALYZE_MOOD_PROMPT,
    CBT_REFRAME_PROMPT,
    GROUNDING_PROMPT,
    HABIT_COACH_PROMPT,
    JOURNAL_INSIGHTS_PROMPT,
    MODERATION_PROMPT,
    PROGRESS_INSIGHTS_PROMPT,
    ROUTINE_PROMPT,
    SESSION_SUMMARY_PROMPT,
    SLEEP_STRESS_PROMPT,
)

logger = get_logger(__name__)

_JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_TRAILING_ITEM_NUMBER = re.compile(r"\s*\d+\.\s*$")


@dataclass
class JournalInsights:
    """Journal analysis with the sections pulled out of the text."""

    insights: str
    triggers: Optional[str] = None
    patterns: Optional[str] = None
    gratitude_prompt: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "insights": self.insights,
            "triggers": self.triggers,
            "patterns": self.patterns,
            "gratitudePrompt": self.gratitude_prompt,
        }


@dataclass
class GeneratedRoutine:
    """Routine text and the schedule parsed from it (empty if unparseable)."""

    routine: str
    schedule: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"routine": self.routine, "schedule": self.schedule}


@dataclass
class ProgressSnapshot:
    """Wellness journey figures the client reports for progress insights."""

    sessions: int = 0
    journal_entries: int = 0
    streak_days: int = 0
    goals_completed_percent: int = 0
    habits_consistency_percent: int = 0
    weekly_mood: list[float] = field(default_factory=list)
    achievements: list[str] = field(default_factory=list)
    user_goals: Optional[str] = None

    def to_prompt(self) -> str:
        weekly_mood = ", ".join(f"{score:g}" for score in self.weekly_mood) or "not tracked"
        achievements = ", ".join(self.achievements) or "none yet"
        return (
            "Analyze my wellness journey:\n"
            f"- Total therapy sessions: {self.sessions}\n"
            f"- Journal entries written: {self.journal_entries}\n"
            f"- Current streak: {self.streak_days} days\n"
            f"- Goals completed: {self.goals_completed_percent}%\n"
            f"- Habits consistency: {self.habits_consistency_percent}%\n"
            f"- Weekly mood scores (Mon-Sun): {weekly_mood}\n"
            f"- Achievements earned: {achievements}\n"
            f"- My wellness goals: {self.user_goals or 'not shared'}\n"
            "\n"
            "Please provide personalized insights and recommendations for my mental health journey."
        )


MODERATION_SEVERITIES = ("low", "medium", "high")


@dataclass
class ModerationVerdict:
    """
    Moderation decision for a community post.

    Moderation fails open: text without a usable JSON verdict is
    approved with ``low`` severity and no flags.
    """

    is_approved: bool = True
    flags: list[str] = field(default_factory=list)
    severity: str = "low"
    reason: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        payload: dict = {
            "isApproved": self.is_approved,
            "flags": self.flags,
            "severity": self.severity,
        }
        if self.reason is not None:
            payload["reason"] = self.reason
        if self.suggestion is not None:
            payload["suggestion"] = self.suggestion
        return payload


def extract_section(text: str, heading: str) -> Optional[str]:
    """
    Pull the body of a ``**Heading...:**`` section.

    The body runs until the next ``**`` marker or the end of the text.
    """
    match = re.search(rf"{heading}[^:]*:\**(.*?)(?=\*\*|$)", text, re.DOTALL)
    if not match:
        return None
    # Drop the list number of the following section
    body = _TRAILING_ITEM_NUMBER.sub("", match.group(1)).strip()
    return body or None


def parse_json_array(text: str) -> list[dict]:
    """First JSON array embedded in text, or an empty list."""
    match = _JSON_ARRAY.search(text)
    if not match:
        return []
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.debug("Generated routine was not valid JSON")
        return []
    if not isinstance(parsed, list):
        return []
    return [item for item in parsed if isinstance(item, dict)]


def parse_moderation(text: str) -> ModerationVerdict:
    """Moderation verdict from the first JSON object in text."""
    match = _JSON_OBJECT.search(text)
    if not match:
        return ModerationVerdict()
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.debug("Moderation verdict was not valid JSON")
        return ModerationVerdict()

    flags = parsed.get("flags")
    severity = str(parsed.get("severity", "low")).lower()
    reason = parsed.get("reason")
    suggestion = parsed.get("suggestion")
    return ModerationVerdict(
        is_approved=parsed.get("isApproved") is not False,
        flags=[str(flag) for flag in flags] if isinstance(flags, list) else [],
        severity=severity if severity in MODERATION_SEVERITIES else "low",
        reason=str(reason) if reason is not None else None,
        suggestion=str(suggestion) if suggestion is not None else None,
    )


class WellnessCoach:
    """
    AI wellness tools backed by the resilient completion client.

    Usage:
        coach = WellnessCoach(client)
        reframe = await coach.reframe_thought("I always fail")
    """

    def __init__(self, completion_client: ResilientCompletionClient) -> None:
        self._client = completion_client

    async def reframe_thought(self, thought: str, context: Optional[str] = None) -> str:
        content = f'Help me reframe this thought: "{thought}"'
        if context:
            content += f". Context: {context}"
        return await self._client.complete(CBT_REFRAME_PROMPT, content, max_tokens=600)

    async def grounding_technique(
        self,
        current_mood: Optional[str] = None,
        situation: Optional[str] = None,
        preferred_type: Optional[str] = None,
    ) -> str:
        content = f"I'm feeling {current_mood or 'anxious'}"
        if situation:
            content += f". Situation: {situation}"
        if preferred_type:
            content += f". Preferred technique type: {preferred_type}"
        content += ". Give me a grounding exercise."
        return await self._client.complete(GROUNDING_PROMPT, content, max_tokens=300)

    async def journal_insights(self, content: str, title: Optional[str] = None) -> JournalInsights:
        prompt = f'Analyze this journal entry titled "{title or "Untitled"}":\n\n{content}'
        insights = await self._client.complete(JOURNAL_INSIGHTS_PROMPT, prompt, max_tokens=500)

        return JournalInsights(
            insights=insights,
            triggers=extract_section(insights, "Triggers"),
            patterns=extract_section(insights, "Patterns"),
            gratitude_prompt=extract_section(insights, "Gratitude"),
        )

    async def generate_routine(
        self,
        goal: str,
        wake_time: str = "7:00 AM",
        sleep_time: str = "10:00 PM",
        challenges: Optional[str] = None,
    ) -> GeneratedRoutine:
        prompt = f"Create a {goal} routine for me. Wake time: {wake_time}, Sleep time: {sleep_time}"
        if challenges:
            prompt += f". Challenges: {challenges}"
        routine = await self._client.complete(ROUTINE_PROMPT, prompt, max_tokens=600)

        return GeneratedRoutine(routine=routine, schedule=parse_json_array(routine))

    async def daily_affirmations(
        self,
        current_mood: Optional[str] = None,
        challenges: Optional[str] = None,
        preferences: Optional[str] = None,
    ) -> str:
        prompt = f"Generate affirmations for me. Current mood: {current_mood or 'neutral'}"
        if challenges:
            prompt += f". Challenges: {challenges}"
        if preferences:
            prompt += f". I like: {preferences}"
        return await self._client.complete(AFFIRMATION_PROMPT, prompt, max_tokens=200)

    async def analyze_mood(
        self,
        mood: str,
        note: Optional[str] = None,
        sleep_hours: Optional[float] = None,
        stress_level: Optional[int] = None,
    ) -> str:
        sleep = "unknown" if sleep_hours is None else f"{sleep_hours:g}"
        stress = "unknown" if stress_level is None else str(stress_level)
        prompt = (
            f"Analyze this mood entry: Mood: {mood}, Note: {note or 'none'}, "
            f"Sleep: {sleep} hours, Stress level: {stress}/10. "
            "Provide supportive insights and 2-3 practical tips."
        )
        return await self._client.complete(ANALYZE_MOOD_PROMPT, prompt)

    async def sleep_stress_insights(self, records: Sequence[MoodRecord]) -> str:
        """
        Sleep and stress patterns over recent mood records.

        Args:
            records: Recent records, newest first; an empty sequence
                is still sent so the model can suggest starting to log
        """
        week = json.dumps([record.to_prompt_dict() for record in records])
        prompt = (
            f"Based on this week's mood data: {week}, provide insights about sleep "
            "patterns and stress levels with practical recommendations."
        )
        return await self._client.complete(SLEEP_STRESS_PROMPT, prompt)

    async def progress_insights(self, snapshot: ProgressSnapshot) -> str:
        return await self._client.complete(PROGRESS_INSIGHTS_PROMPT, snapshot.to_prompt())

    async def habit_coaching(
        self,
        habit: str,
        current_streak: int = 0,
        challenges: Optional[str] = None,
    ) -> str:
        prompt = (
            f"Help me with this habit: {habit}. Current streak: {current_streak} days. "
            f"Challenges: {challenges or 'none mentioned'}. Give me motivation and tips."
        )
        return await self._client.complete(HABIT_COACH_PROMPT, prompt)

    async def post_session_summary(
        self,
        session_notes: str,
        therapist_name: Optional[str] = None,
        session_goals: Optional[str] = None,
    ) -> str:
        prompt = "Summarize my therapy session"
        if therapist_name:
            prompt += f" with {therapist_name}"
        if session_goals:
            prompt += f". Goals: {session_goals}"
        prompt += f"\n\nSession notes:\n{session_notes}"
        return await self._client.complete(SESSION_SUMMARY_PROMPT, prompt, max_tokens=500)

    async def moderate_content(self, content: str, context: Optional[str] = None) -> ModerationVerdict:
        """
        Screen a community post before it is published.

        Provider failures still propagate; only an unreadable verdict
        falls back to approval.
        """
        prompt = f"Moderate this {context or 'community post'}:\n\n{content}"
        verdict_text = await self._client.complete(MODERATION_PROMPT, prompt, max_tokens=300)

        verdict = parse_moderation(verdict_text)
        if not verdict.is_approved:
            logger.info("Community content rejected", severity=verdict.severity, flags=verdict.flags)
        return verdict
