"""
Unit Tests for Resilient Completion Client

Tests retry schedule, exhaustion, the unavailable short-circuit,
the success report and the attempt observer. No real sleeps:
delays are recorded.
"""

from typing import Any

import pytest

from fakes import FakeProvider, RecordingSleep
from heal.config.settings import RetrySettings
from heal.infrastructure.llm.provider import (
    CompletionProviderError,
    CompletionResponse,
    ExhaustedRetriesError,
    ProviderUnavailableError,
    RateLimitError,
)
from heal.services.llm.completion_client import (
    AttemptFailure,
    CompletionSuccess,
    ResilientCompletionClient,
    RetryPolicy,
)
from heal.services.llm import completion_client as completion_client_module


class TestRetryPolicy:
    """Test suite for RetryPolicy."""

    def test_default_schedule_doubles(self) -> None:
        policy = RetryPolicy()

        assert [policy.delay_after(n) for n in range(1, 5)] == [2.0, 4.0, 8.0, 16.0]

    def test_from_settings(self) -> None:
        policy = RetryPolicy.from_settings(
            RetrySettings(max_attempts=3, base_delay_seconds=1.0, multiplier=3.0)
        )

        assert policy == RetryPolicy(max_attempts=3, base_delay_seconds=1.0, multiplier=3.0)

    def test_immediate_has_no_delay(self) -> None:
        assert RetryPolicy.immediate().delay_after(4) == 0.0

    def test_zero_attempts_rejected(self) -> None:
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)


class TestResilientCompletionClient:
    """Test suite for ResilientCompletionClient."""

    async def test_first_attempt_success(self, recording_sleep: RecordingSleep) -> None:
        provider = FakeProvider(["Hello there"])
        client = ResilientCompletionClient(provider, RetryPolicy(), sleep=recording_sleep)

        text = await client.complete("system", "User: hi")

        assert text == "Hello there"
        assert provider.calls == 1
        assert recording_sleep.delays == []

    async def test_passes_request_fields(self, recording_sleep: RecordingSleep) -> None:
        provider = FakeProvider(["ok"])
        client = ResilientCompletionClient(provider, RetryPolicy(), sleep=recording_sleep)

        await client.complete("be kind", "User: hi", max_tokens=300, temperature=0.2)

        request = provider.requests[0]
        assert request.system_instructions == "be kind"
        assert request.user_content == "User: hi"
        assert request.max_tokens == 300
        assert request.temperature == 0.2

    async def test_succeeds_on_fifth_attempt_with_doubling_backoff(
        self,
        recording_sleep: RecordingSleep,
    ) -> None:
        provider = FakeProvider([ConnectionError("reset")] * 4 + ["Fifth time lucky"])
        client = ResilientCompletionClient(provider, RetryPolicy(), sleep=recording_sleep)

        text = await client.complete("system", "User: hi")

        assert text == "Fifth time lucky"
        assert provider.calls == 5
        assert recording_sleep.delays == [2.0, 4.0, 8.0, 16.0]

    async def test_exhausted_after_max_attempts(self, recording_sleep: RecordingSleep) -> None:
        provider = FakeProvider([ConnectionError("upstream down")])
        client = ResilientCompletionClient(provider, RetryPolicy(), sleep=recording_sleep)

        with pytest.raises(ExhaustedRetriesError) as exc_info:
            await client.complete("system", "User: hi")

        assert provider.calls == 5
        assert exc_info.value.attempts == 5
        assert isinstance(exc_info.value.last_error.original_error, ConnectionError)
        assert recording_sleep.delays == [2.0, 4.0, 8.0, 16.0]

    async def test_non_retryable_provider_errors_are_still_retried(
        self,
        recording_sleep: RecordingSleep,
    ) -> None:
        provider = FakeProvider([
            CompletionProviderError("bad request", provider="fake", status_code=400),
            "recovered",
        ])
        client = ResilientCompletionClient(provider, RetryPolicy(), sleep=recording_sleep)

        assert await client.complete("system", "User: hi") == "recovered"
        assert provider.calls == 2

    async def test_unavailable_short_circuits(self, recording_sleep: RecordingSleep) -> None:
        client = ResilientCompletionClient(None, RetryPolicy(), sleep=recording_sleep)

        with pytest.raises(ProviderUnavailableError):
            await client.complete("system", "User: hi")

        assert not client.is_available
        assert recording_sleep.delays == []

    async def test_unavailable_health_check(self) -> None:
        assert await ResilientCompletionClient(None).health_check() is False

    async def test_observer_receives_each_failure(self, recording_sleep: RecordingSleep) -> None:
        failures: list[AttemptFailure] = []
        provider = FakeProvider([RateLimitError("fake"), RateLimitError("fake"), "ok"])
        client = ResilientCompletionClient(
            provider,
            RetryPolicy(max_attempts=3),
            sleep=recording_sleep,
            on_attempt_failed=failures.append,
        )

        await client.complete("system", "User: hi")

        assert [f.attempt for f in failures] == [1, 2]
        assert all(f.status_code == 429 for f in failures)
        assert [f.next_delay_seconds for f in failures] == [2.0, 4.0]

    async def test_last_failure_has_no_next_delay(self, recording_sleep: RecordingSleep) -> None:
        failures: list[AttemptFailure] = []
        client = ResilientCompletionClient(
            FakeProvider([TimeoutError()]),
            RetryPolicy(max_attempts=2),
            sleep=recording_sleep,
            on_attempt_failed=failures.append,
        )

        with pytest.raises(ExhaustedRetriesError):
            await client.complete("system", "User: hi")

        assert failures[-1].attempt == 2
        assert failures[-1].next_delay_seconds is None

    async def test_failing_observer_does_not_break_retries(
        self,
        recording_sleep: RecordingSleep,
    ) -> None:
        def broken_observer(failure: AttemptFailure) -> None:
            raise RuntimeError("metrics backend down")

        provider = FakeProvider([ConnectionError("reset"), "ok"])
        client = ResilientCompletionClient(
            provider,
            RetryPolicy(),
            sleep=recording_sleep,
            on_attempt_failed=broken_observer,
        )

        assert await client.complete("system", "User: hi") == "ok"
        assert provider.calls == 2


class RecordingLogger:
    """Module logger stand-in; ``fail`` makes every call raise."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str, event: str, **fields: Any) -> None:
        if self.fail:
            raise RuntimeError("log sink unavailable")
        self.events.append((level, event, fields))

    def info(self, event: str, **fields: Any) -> None:
        self._record("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._record("warning", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._record("error", event, **fields)


class TestCompletionReporting:
    """Test suite for success and failure reporting."""

    async def test_success_report_carries_upstream_bookkeeping(
        self,
        recording_sleep: RecordingSleep,
    ) -> None:
        reports: list[CompletionSuccess] = []
        provider = FakeProvider([
            ConnectionError("reset"),
            CompletionResponse(
                content="ok",
                finish_reason="length",
                total_tokens=42,
                model="gemini-1.5-flash",
                provider="gemini",
                latency_ms=120,
            ),
        ])
        client = ResilientCompletionClient(
            provider,
            RetryPolicy(),
            sleep=recording_sleep,
            on_completed=reports.append,
        )

        assert await client.complete("system", "User: hi") == "ok"

        assert reports == [
            CompletionSuccess(
                attempt=2,
                provider="gemini",
                model="gemini-1.5-flash",
                latency_ms=120,
                finish_reason="length",
                total_tokens=42,
            )
        ]

    async def test_success_is_logged_with_latency_and_finish_reason(
        self,
        recording_sleep: RecordingSleep,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        recorder = RecordingLogger()
        monkeypatch.setattr(completion_client_module, "logger", recorder)
        provider = FakeProvider([
            CompletionResponse(content="ok", finish_reason="stop", latency_ms=85),
        ])
        client = ResilientCompletionClient(provider, RetryPolicy(), sleep=recording_sleep)

        await client.complete("system", "User: hi")

        level, event, fields = recorder.events[-1]
        assert (level, event) == ("info", "Completion generated")
        assert fields["latency_ms"] == 85
        assert fields["finish_reason"] == "stop"
        assert fields["attempt"] == 1
        # Falls back to the provider's own name and model
        assert fields["provider"] == "fake"
        assert fields["model"] == "fake-model"

    async def test_failing_log_sink_still_notifies_observers(
        self,
        recording_sleep: RecordingSleep,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(completion_client_module, "logger", RecordingLogger(fail=True))
        failures: list[AttemptFailure] = []
        reports: list[CompletionSuccess] = []
        provider = FakeProvider([TimeoutError(), "ok"])
        client = ResilientCompletionClient(
            provider,
            RetryPolicy(),
            sleep=recording_sleep,
            on_attempt_failed=failures.append,
            on_completed=reports.append,
        )

        assert await client.complete("system", "User: hi") == "ok"

        assert [f.attempt for f in failures] == [1]
        assert [r.attempt for r in reports] == [2]

    async def test_failing_observer_does_not_stop_failure_log(
        self,
        recording_sleep: RecordingSleep,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        recorder = RecordingLogger()
        monkeypatch.setattr(completion_client_module, "logger", recorder)

        def broken_observer(failure: AttemptFailure) -> None:
            raise RuntimeError("metrics backend down")

        client = ResilientCompletionClient(
            FakeProvider([ConnectionError("reset"), "ok"]),
            RetryPolicy(),
            sleep=recording_sleep,
            on_attempt_failed=broken_observer,
        )

        await client.complete("system", "User: hi")

        assert [e for _, e, _ in recorder.events] == [
            "Completion attempt failed",
            "Completion generated",
        ]
