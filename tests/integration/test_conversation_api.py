"""
Integration Tests - Conversation, Mood and Analytics API

Runs the database-backed endpoints against in-memory SQLite through
an ASGI client on the test event loop.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from uuid import UUID, uuid4

import httpx
import pytest
from sqlalchemy import select

from fakes import FakeAlertStore, FakeProvider, make_client
from heal.api.dependencies import get_database, get_orchestrator, get_summarizer, get_wellness_coach
from heal.config import Settings
from heal.infrastructure.database import DatabaseManager
from heal.infrastructure.database.models import MoodAnalyticsModel, MoodEntryModel
from heal.main import create_application
from heal.services.analytics.mood_summarizer import MoodAnalyticsSummarizer
from heal.services.orchestration.chat_orchestrator import ChatOrchestrator
from heal.services.prompt.companion_prompts import FALLBACK_INSIGHTS
from heal.services.safety.crisis_detector import CrisisDetector
from heal.services.wellness.wellness_coach import WellnessCoach


@pytest.fixture
async def db() -> AsyncGenerator[DatabaseManager, None]:
    manager = DatabaseManager(url="sqlite+aiosqlite:///:memory:")
    await manager.initialize()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(["I'm here with you."])


@pytest.fixture
def alert_store() -> FakeAlertStore:
    return FakeAlertStore()


@pytest.fixture
async def api(
    test_settings: Settings,
    db: DatabaseManager,
    provider: FakeProvider,
    alert_store: FakeAlertStore,
    user_id: UUID,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_application(test_settings)
    completion_client = make_client(provider)
    orchestrator = ChatOrchestrator(CrisisDetector(), completion_client, alert_store)
    summarizer = MoodAnalyticsSummarizer(completion_client)
    coach = WellnessCoach(completion_client)

    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_summarizer] = lambda: summarizer
    app.dependency_overrides[get_wellness_coach] = lambda: coach

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://testserver/api/v1",
        headers={"X-User-ID": str(user_id)},
    ) as client:
        yield client


class TestConversationEndpoints:
    """/api/v1/conversations"""

    async def test_create_and_list(self, api: httpx.AsyncClient) -> None:
        created = await api.post("/conversations", json={"title": "Sunday check-in"})

        assert created.status_code == 201
        body = created.json()
        assert body["title"] == "Sunday check-in"
        assert body["type"] == "chat"
        assert "createdAt" in body

        listed = await api.get("/conversations")
        assert [c["id"] for c in listed.json()] == [body["id"]]

    async def test_default_title(self, api: httpx.AsyncClient) -> None:
        created = await api.post("/conversations", json={})

        assert created.json()["title"] == "New Chat"

    async def test_message_round_trip(self, api: httpx.AsyncClient, provider: FakeProvider) -> None:
        conversation_id = (await api.post("/conversations", json={})).json()["id"]

        reply = await api.post(f"/conversations/{conversation_id}/messages", json={"content": "Long day"})

        assert reply.status_code == 200
        assert reply.json() == {
            "message": "I'm here with you.",
            "isCrisis": False,
            "crisisSeverity": "none",
        }

        detail = (await api.get(f"/conversations/{conversation_id}")).json()
        assert [(m["role"], m["content"]) for m in detail["messages"]] == [
            ("user", "Long day"),
            ("assistant", "I'm here with you."),
        ]

    async def test_stored_turns_become_history(self, api: httpx.AsyncClient, provider: FakeProvider) -> None:
        conversation_id = (await api.post("/conversations", json={})).json()["id"]

        await api.post(f"/conversations/{conversation_id}/messages", json={"content": "Hi"})
        await api.post(f"/conversations/{conversation_id}/messages", json={"content": "Still there?"})

        assert provider.requests[1].user_content == (
            "User: Hi\nCompanion: I'm here with you.\nUser: Still there?"
        )

    async def test_crisis_message_in_thread(
        self,
        api: httpx.AsyncClient,
        alert_store: FakeAlertStore,
    ) -> None:
        conversation_id = (await api.post("/conversations", json={})).json()["id"]

        reply = await api.post(
            f"/conversations/{conversation_id}/messages",
            json={"content": "I don't want to live anymore"},
        )

        body = reply.json()
        assert body["isCrisis"] is True
        assert body["crisisSeverity"] == "medium"
        assert "988" in body["message"]
        assert len(alert_store.alerts) == 1

    async def test_other_users_conversation_not_found(self, api: httpx.AsyncClient) -> None:
        conversation_id = (await api.post("/conversations", json={})).json()["id"]
        stranger = {"X-User-ID": str(uuid4())}

        assert (await api.get(f"/conversations/{conversation_id}", headers=stranger)).status_code == 404
        response = await api.post(
            f"/conversations/{conversation_id}/messages",
            json={"content": "Hi"},
            headers=stranger,
        )
        assert response.status_code == 404

    async def test_delete(self, api: httpx.AsyncClient) -> None:
        conversation_id = (await api.post("/conversations", json={})).json()["id"]

        assert (await api.delete(f"/conversations/{conversation_id}")).status_code == 204
        assert (await api.get(f"/conversations/{conversation_id}")).status_code == 404
        assert (await api.delete(f"/conversations/{conversation_id}")).status_code == 404


class TestMoodEndpoints:
    """/api/v1/mood-entries"""

    async def test_create_and_list(self, api: httpx.AsyncClient) -> None:
        created = await api.post(
            "/mood-entries",
            json={"mood": "Calm", "sleepHours": 8, "stressLevel": 2, "note": "Yoga helped"},
        )

        assert created.status_code == 201
        body = created.json()
        assert body["mood"] == "calm"
        assert body["sleepHours"] == 8
        assert body["stressLevel"] == 2

        entries = (await api.get("/mood-entries")).json()
        assert [e["id"] for e in entries] == [body["id"]]

    async def test_invalid_stress_level(self, api: httpx.AsyncClient) -> None:
        response = await api.post("/mood-entries", json={"mood": "sad", "stressLevel": 42})

        assert response.status_code == 422


class TestMoodAnalyticsEndpoint:
    """/api/v1/ai/mood-analytics"""

    async def test_not_enough_data(self, api: httpx.AsyncClient, provider: FakeProvider) -> None:
        response = await api.get("/ai/mood-analytics", params={"period": "weekly"})

        assert response.status_code == 200
        assert response.json() == {"message": "Not enough mood data yet", "analytics": None}
        assert provider.calls == 0

    async def test_weekly_summary(
        self,
        api: httpx.AsyncClient,
        provider: FakeProvider,
        db: DatabaseManager,
    ) -> None:
        for mood in ("happy", "happy", "sad"):
            await api.post("/mood-entries", json={"mood": mood})

        response = await api.get("/ai/mood-analytics", params={"period": "weekly"})

        assert response.status_code == 200
        analytics = response.json()["analytics"]
        assert analytics == {
            "periodType": "weekly",
            "averageMoodScore": 4.0,
            "dominantMood": "happy",
            "totalEntries": 3,
            "moodDistribution": {"happy": 2, "sad": 1},
            "insights": "I'm here with you.",
        }

        async with db.session() as session:
            snapshots = (await session.execute(select(MoodAnalyticsModel))).scalars().all()
        assert len(snapshots) == 1

    async def test_weekly_window_excludes_older_entries(
        self,
        api: httpx.AsyncClient,
        db: DatabaseManager,
        user_id: UUID,
    ) -> None:
        async with db.session() as session:
            session.add(MoodEntryModel(
                user_id=user_id,
                mood="anxious",
                created_at=datetime.now(timezone.utc) - timedelta(days=12),
            ))
        await api.post("/mood-entries", json={"mood": "calm"})

        weekly = (await api.get("/ai/mood-analytics", params={"period": "weekly"})).json()
        monthly = (await api.get("/ai/mood-analytics", params={"period": "monthly"})).json()

        assert weekly["analytics"]["totalEntries"] == 1
        assert monthly["analytics"]["totalEntries"] == 2

    async def test_provider_failure_still_returns_analytics(
        self,
        api: httpx.AsyncClient,
        provider: FakeProvider,
    ) -> None:
        await api.post("/mood-entries", json={"mood": "sad"})
        provider.outcomes = [ConnectionError("down")]

        response = await api.get("/ai/mood-analytics")

        assert response.status_code == 200
        assert response.json()["analytics"]["insights"] == FALLBACK_INSIGHTS

    async def test_invalid_period(self, api: httpx.AsyncClient) -> None:
        response = await api.get("/ai/mood-analytics", params={"period": "yearly"})

        assert response.status_code == 422


class TestSleepStressInsightsEndpoint:
    """/api/v1/ai/sleep-stress-insights"""

    async def test_last_seven_entries_of_user_newest_first(
        self,
        api: httpx.AsyncClient,
        provider: FakeProvider,
        db: DatabaseManager,
    ) -> None:
        moods = ["happy", "calm", "neutral", "sad", "anxious", "calm", "happy", "sad"]
        for mood in moods:
            await api.post("/mood-entries", json={"mood": mood, "sleepHours": 6})
        async with db.session() as session:
            session.add(MoodEntryModel(user_id=uuid4(), mood="grumpy"))

        response = await api.post("/ai/sleep-stress-insights")

        assert response.status_code == 200
        assert response.json() == {"insights": "I'm here with you."}
        content = provider.requests[0].user_content
        week = json.loads(content[len("Based on this week's mood data: "):].split(", provide insights")[0])
        assert [entry["mood"] for entry in week] == list(reversed(moods[1:]))
        assert all(entry["sleep"] == 6 for entry in week)

    async def test_provider_failure_is_503(self, api: httpx.AsyncClient, provider: FakeProvider) -> None:
        provider.outcomes = [ConnectionError("down")]

        response = await api.post("/ai/sleep-stress-insights")

        assert response.status_code == 503
