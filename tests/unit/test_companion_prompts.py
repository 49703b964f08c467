"""
Unit Tests for Companion Prompt Templates
"""

from heal.domain.enums.chat_role import ChatRole
from heal.domain.models.chat import ChatTurn
from heal.services.prompt.companion_prompts import (
    COMPANION_SYSTEM_PROMPT,
    CRISIS_FALLBACK_REPLY,
    CRISIS_LINE_DISCLOSURE,
    CRISIS_PROMPT_ADDENDUM,
    build_companion_prompt,
    render_transcript,
)


class TestCompanionPrompts:
    """Test suite for prompt assembly."""

    def test_regular_prompt_has_no_addendum(self) -> None:
        assert build_companion_prompt(False) == COMPANION_SYSTEM_PROMPT

    def test_crisis_prompt_appends_addendum(self) -> None:
        prompt = build_companion_prompt(True)

        assert prompt.startswith(COMPANION_SYSTEM_PROMPT)
        assert prompt.endswith(CRISIS_PROMPT_ADDENDUM)

    def test_crisis_texts_carry_disclosure(self) -> None:
        assert CRISIS_LINE_DISCLOSURE in CRISIS_PROMPT_ADDENDUM
        assert CRISIS_LINE_DISCLOSURE in CRISIS_FALLBACK_REPLY

    def test_transcript_without_history(self) -> None:
        assert render_transcript([], "Hello") == "User: Hello"

    def test_wire_roles_map_to_labels(self) -> None:
        history = [
            ChatTurn(role=ChatRole.from_wire("user"), content="Hi"),
            ChatTurn(role=ChatRole.from_wire("ai"), content="Hey!"),
            ChatTurn(role=ChatRole.from_wire("something-else"), content="Odd role"),
        ]

        assert render_transcript(history, "Bye") == (
            "User: Hi\nCompanion: Hey!\nUser: Odd role\nUser: Bye"
        )
