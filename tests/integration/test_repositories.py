"""
Integration Tests - Repositories

Runs the SQLAlchemy repositories against in-memory SQLite.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from uuid import UUID, uuid4

import pytest

from heal.domain.enums.chat_role import ChatRole
from heal.domain.enums.crisis_severity import CrisisSeverity
from heal.domain.enums.mood_period import MoodPeriod
from heal.domain.models.mood import MoodAnalyticsSummary
from heal.infrastructure.database import DatabaseManager
from heal.infrastructure.database.models import CrisisAlertModel, MoodAnalyticsModel
from heal.infrastructure.database.repositories import (
    ConversationRepository,
    CrisisAlertRepository,
    DatabaseCrisisAlertStore,
    MoodAnalyticsRepository,
    MoodEntryRepository,
)


@pytest.fixture
async def db() -> AsyncGenerator[DatabaseManager, None]:
    manager = DatabaseManager(url="sqlite+aiosqlite:///:memory:")
    await manager.initialize()
    await manager.create_all()
    yield manager
    await manager.close()


class TestConversationRepository:
    """Conversation threads and turns."""

    async def test_turns_round_trip_in_order(self, db: DatabaseManager, user_id: UUID) -> None:
        async with db.session() as session:
            repo = ConversationRepository(session)
            conversation = await repo.create_conversation(user_id, "Evening chat")
            await repo.add_turn(conversation.id, ChatRole.USER, "Hi")
            await repo.add_turn(conversation.id, ChatRole.ASSISTANT, "Hello!")
            conversation_id = conversation.id

        async with db.session() as session:
            turns = await ConversationRepository(session).get_turns(conversation_id)

        assert [(t.role, t.content) for t in turns] == [
            (ChatRole.USER, "Hi"),
            (ChatRole.ASSISTANT, "Hello!"),
        ]

    async def test_conversations_scoped_to_user(self, db: DatabaseManager, user_id: UUID) -> None:
        other_user = uuid4()
        async with db.session() as session:
            repo = ConversationRepository(session)
            mine = await repo.create_conversation(user_id)
            await repo.create_conversation(other_user)

            assert [c.id for c in await repo.list_for_user(user_id)] == [mine.id]
            assert await repo.get_for_user(mine.id, other_user) is None
            assert (await repo.get_for_user(mine.id, user_id)).title == "New Chat"

    async def test_get_with_messages(self, db: DatabaseManager, user_id: UUID) -> None:
        async with db.session() as session:
            repo = ConversationRepository(session)
            conversation = await repo.create_conversation(user_id)
            await repo.add_turn(conversation.id, ChatRole.USER, "Hi")
            conversation_id = conversation.id

        async with db.session() as session:
            loaded = await ConversationRepository(session).get_for_user(
                conversation_id, user_id, with_messages=True,
            )

        assert [m.content for m in loaded.messages] == ["Hi"]

    async def test_add_turn_leaves_no_open_transaction(self, db: DatabaseManager, user_id: UUID) -> None:
        async with db.session() as session:
            repo = ConversationRepository(session)
            conversation = await repo.create_conversation(user_id)
            await repo.add_turn(conversation.id, ChatRole.USER, "Hi")

            assert not session.in_transaction()

    async def test_stored_turn_survives_later_rollback(self, db: DatabaseManager, user_id: UUID) -> None:
        with pytest.raises(RuntimeError):
            async with db.session() as session:
                repo = ConversationRepository(session)
                conversation = await repo.create_conversation(user_id)
                await repo.add_turn(conversation.id, ChatRole.USER, "Are you there?")
                conversation_id = conversation.id
                raise RuntimeError("reply generation aborted")

        async with db.session() as session:
            turns = await ConversationRepository(session).get_turns(conversation_id)

        assert [t.content for t in turns] == ["Are you there?"]


class TestMoodEntryRepository:
    """Mood entries and analytics windows."""

    async def test_records_since_filters_window_and_user(self, db: DatabaseManager, user_id: UUID) -> None:
        now = datetime.now(timezone.utc)
        async with db.session() as session:
            repo = MoodEntryRepository(session)
            old = await repo.create_entry(user_id, "sad")
            old.created_at = now - timedelta(days=10)
            await repo.create_entry(user_id, "happy", stress_level=3, sleep_hours=8)
            await repo.create_entry(user_id, "calm")
            await repo.create_entry(uuid4(), "anxious")

        async with db.session() as session:
            window = await MoodEntryRepository(session).list_records_since(
                user_id, now - timedelta(days=MoodPeriod.WEEKLY.days),
            )

        assert [r.mood for r in window] == ["happy", "calm"]
        assert window[0].stress_level == 3
        assert window[0].sleep_hours == 8

    async def test_list_for_user_newest_first(self, db: DatabaseManager, user_id: UUID) -> None:
        async with db.session() as session:
            repo = MoodEntryRepository(session)
            await repo.create_entry(user_id, "sad")
            await repo.create_entry(user_id, "happy")

            entries = await repo.list_for_user(user_id, limit=1)

        assert [e.mood for e in entries] == ["happy"]


class TestMoodAnalyticsRepository:
    """Analytics snapshots."""

    async def test_save_summary(self, db: DatabaseManager, user_id: UUID) -> None:
        summary = MoodAnalyticsSummary(
            period_type=MoodPeriod.MONTHLY,
            average_mood_score=3.5,
            dominant_mood="calm",
            total_entries=4,
            mood_distribution={"calm": 3, "sad": 1},
            insights="Steady month.",
        )

        async with db.session() as session:
            saved = await MoodAnalyticsRepository(session).save_summary(user_id, summary)
            snapshot_id = saved.id

        async with db.session() as session:
            stored = await session.get(MoodAnalyticsModel, snapshot_id)

        assert stored.period_type == "monthly"
        assert stored.mood_distribution == {"calm": 3, "sad": 1}
        assert stored.insights == "Steady month."


class TestCrisisAlerts:
    """Crisis alert persistence."""

    async def test_repository_creates_unresolved_alert(self, db: DatabaseManager, user_id: UUID) -> None:
        async with db.session() as session:
            alert = await CrisisAlertRepository(session).create_crisis_alert(
                user_id,
                severity=CrisisSeverity.HIGH,
                trigger_phrase="kill myself",
                response_given="Crisis protocol activated",
            )

        assert alert.severity == CrisisSeverity.HIGH
        assert not alert.resolved
        assert alert.user_id == user_id

    async def test_store_commits_in_own_session(self, db: DatabaseManager, user_id: UUID) -> None:
        store = DatabaseCrisisAlertStore(db)

        alert = await store.create_crisis_alert(
            user_id,
            severity=CrisisSeverity.MEDIUM,
            trigger_phrase="hopeless",
            response_given="Crisis protocol activated",
        )

        async with db.session() as session:
            stored = await session.get(CrisisAlertModel, alert.id)
            count = await CrisisAlertRepository(session).count()

        assert stored.trigger_phrase == "hopeless"
        assert stored.severity == "medium"
        assert count == 1

    async def test_store_raises_when_database_unavailable(self, user_id: UUID) -> None:
        store = DatabaseCrisisAlertStore(DatabaseManager(url="sqlite+aiosqlite:///:memory:"))

        with pytest.raises(RuntimeError):
            await store.create_crisis_alert(
                user_id,
                severity=CrisisSeverity.HIGH,
                trigger_phrase="suicide",
                response_given="Crisis protocol activated",
            )
