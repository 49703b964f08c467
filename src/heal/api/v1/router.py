"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from heal.api.v1.endpoints.analytics import router as analytics_router
from heal.api.v1.endpoints.chat import router as chat_router
from heal.api.v1.endpoints.conversations import router as conversations_router
from heal.api.v1.endpoints.health import router as health_router
from heal.api.v1.endpoints.mood import router as mood_router
from heal.api.v1.endpoints.wellness import router as wellness_router

api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["Health"])
api_router.include_router(chat_router, prefix="/chat", tags=["Chat"])
api_router.include_router(conversations_router, prefix="/conversations", tags=["Conversations"])
api_router.include_router(mood_router, prefix="/mood-entries", tags=["Mood"])
api_router.include_router(analytics_router, prefix="/ai", tags=["Analytics"])
api_router.include_router(wellness_router, prefix="/ai", tags=["Wellness"])
