"""
Unit Tests for Logging Processors and Error Middleware

Chat content and credentials must never reach log output.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from heal import __version__
from heal.api.middleware.error_handler import CORRELATION_HEADER, ErrorHandlerMiddleware
from heal.config.logging_config import add_service_context, drop_chat_content, redact_secrets


class TestDropChatContent:
    """Test suite for the chat content processor."""

    def test_content_replaced_by_length(self) -> None:
        event = drop_chat_content(None, "info", {"event": "Chat turn", "message": "I feel hopeless"})

        assert "message" not in event
        assert event["message_length"] == len("I feel hopeless")
        assert event["event"] == "Chat turn"

    def test_history_replaced_by_item_count(self) -> None:
        event = drop_chat_content(None, "info", {"event": "x", "history": [{"a": 1}, {"b": 2}]})

        assert event == {"event": "x", "history_length": 2}

    def test_other_keys_untouched(self) -> None:
        event = drop_chat_content(None, "info", {"event": "x", "severity": "high"})

        assert event == {"event": "x", "severity": "high"}


class TestRedactSecrets:
    """Test suite for the secret redaction processor."""

    def test_top_level_and_nested_secrets(self) -> None:
        event = redact_secrets(
            None,
            "info",
            {"event": "x", "api_key": "k", "config": {"db_password": "p", "pool_size": 5}},
        )

        assert event["api_key"] == "[REDACTED]"
        assert event["config"] == {"db_password": "[REDACTED]", "pool_size": 5}

    def test_service_context(self) -> None:
        event = add_service_context(None, "info", {"event": "x"})

        assert event["service"] == "heal-backend"
        assert event["version"] == __version__


def _failing_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(ErrorHandlerMiddleware)

    @app.get("/ok")
    async def ok() -> dict:
        return {"ok": True}

    @app.get("/boom")
    async def boom() -> dict:
        raise ValueError("database password is hunter2")

    return app


class TestErrorHandlerMiddleware:
    """Test suite for ErrorHandlerMiddleware."""

    def test_correlation_id_echoed(self) -> None:
        client = TestClient(_failing_app())

        response = client.get("/ok", headers={CORRELATION_HEADER: "abc-123"})

        assert response.status_code == 200
        assert response.headers[CORRELATION_HEADER] == "abc-123"

    def test_correlation_id_generated(self) -> None:
        response = TestClient(_failing_app()).get("/ok")

        assert response.headers[CORRELATION_HEADER]

    def test_unhandled_error_is_sanitized(self) -> None:
        client = TestClient(_failing_app(), raise_server_exceptions=False)

        response = client.get("/boom", headers={CORRELATION_HEADER: "req-1"})

        assert response.status_code == 500
        body = response.json()
        assert body["correlation_id"] == "req-1"
        assert "hunter2" not in response.text
