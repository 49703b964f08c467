"""Tests configuration and fixtures."""

from uuid import UUID, uuid4

import pytest

from heal.config import Settings
from fakes import RecordingSleep


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no provider credentials."""
    return Settings(
        env="development",
        debug=True,
        llm_primary_provider="gemini",
    )
