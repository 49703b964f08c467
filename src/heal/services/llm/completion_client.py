"""
Resilient Completion Client

Wraps a single completion provider call in a bounded retry policy
with exponential backoff (no jitter).

ARCHITECTURE: The client knows nothing about crisis semantics. It either
returns generated text or raises a typed failure; callers decide what
the user sees.
"""

import asyncio
from contextlib import suppress
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from heal.config.logging_config import get_logger
from heal.config.settings import RetrySettings
from heal.infrastructure.llm.provider import (
    CompletionProvider,
    CompletionProviderError,
    CompletionRequest,
    CompletionResponse,
    ExhaustedRetriesError,
    ProviderUnavailableError,
    TransientProviderError,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry schedule for provider calls.

    Delay before attempt ``n + 1`` is
    ``base_delay_seconds * multiplier ** (n - 1)``: 2s, 4s, 8s, 16s
    with the defaults.
    """

    max_attempts: int = 5
    base_delay_seconds: float = 2.0
    multiplier: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_seconds < 0 or self.multiplier < 1:
            raise ValueError("Backoff must be non-negative and non-shrinking")

    def delay_after(self, attempt: int) -> float:
        """Seconds to wait after the given failed attempt."""
        return self.base_delay_seconds * self.multiplier ** (attempt - 1)

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.max_attempts,
            base_delay_seconds=settings.base_delay_seconds,
            multiplier=settings.multiplier,
        )

    @classmethod
    def immediate(cls, max_attempts: int = 5) -> "RetryPolicy":
        """Zero-delay policy for tests and local tooling."""
        return cls(max_attempts=max_attempts, base_delay_seconds=0.0, multiplier=1.0)


@dataclass(frozen=True)
class AttemptFailure:
    """Report for a single failed attempt, handed to the observer hook."""

    attempt: int
    max_attempts: int
    provider: str
    status_code: Optional[int]
    error: str
    next_delay_seconds: Optional[float]


@dataclass(frozen=True)
class CompletionSuccess:
    """Report for the attempt that produced text."""

    attempt: int
    provider: str
    model: str
    latency_ms: int
    finish_reason: str
    total_tokens: Optional[int]


AttemptObserver = Callable[[AttemptFailure], None]
CompletionObserver = Callable[[CompletionSuccess], None]
Sleeper = Callable[[float], Awaitable[None]]


class ResilientCompletionClient:
    """
    Bounded-retry wrapper around a completion provider.

    Holds no mutable state: concurrent ``complete`` calls are
    independent of each other.

    Usage:
        client = ResilientCompletionClient(provider, RetryPolicy())
        text = await client.complete(system_prompt, transcript)
    """

    def __init__(
        self,
        provider: Optional[CompletionProvider],
        policy: Optional[RetryPolicy] = None,
        *,
        sleep: Sleeper = asyncio.sleep,
        on_attempt_failed: Optional[AttemptObserver] = None,
        on_completed: Optional[CompletionObserver] = None,
    ) -> None:
        """
        Initialize client.

        Args:
            provider: Completion provider, or None when unconfigured
            policy: Retry policy (defaults to 5 attempts, 2s doubling)
            sleep: Awaitable used for backoff waits
            on_attempt_failed: Observer called for every failed attempt
            on_completed: Observer called once per successful completion
        """
        self._provider = provider
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._on_attempt_failed = on_attempt_failed
        self._on_completed = on_completed

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def is_available(self) -> bool:
        """Whether a provider was configured at startup."""
        return self._provider is not None

    async def health_check(self) -> bool:
        if self._provider is None:
            return False
        return await self._provider.health_check()

    async def complete(
        self,
        system_instructions: str,
        user_content: str,
        *,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Generate text, retrying failed attempts per policy.

        Args:
            system_instructions: Persona and constraints
            user_content: Transcript or prompt text
            max_tokens: Optional output token cap
            temperature: Optional sampling temperature

        Returns:
            Generated text

        Raises:
            ProviderUnavailableError: No provider configured (no attempt made)
            ExhaustedRetriesError: Every attempt failed
        """
        if self._provider is None:
            raise ProviderUnavailableError()

        request = CompletionRequest(
            system_instructions=system_instructions,
            user_content=user_content,
            max_tokens=max_tokens,
            temperature=temperature,
        )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._policy.max_attempts),
            wait=wait_exponential(
                multiplier=self._policy.base_delay_seconds,
                exp_base=self._policy.multiplier,
            ),
            retry=retry_if_exception_type(TransientProviderError),
            sleep=self._sleep,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._attempt(request, attempt.retry_state.attempt_number)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logger.error(
                "Completion retries exhausted",
                provider=self._provider.provider_name,
                attempts=e.last_attempt.attempt_number,
                error=str(last_error),
            )
            raise ExhaustedRetriesError(
                provider=self._provider.provider_name,
                attempts=e.last_attempt.attempt_number,
                last_error=last_error,
            ) from last_error

        self._report_success(response, attempt.retry_state.attempt_number)
        return response.content

    async def _attempt(self, request: CompletionRequest, attempt: int) -> CompletionResponse:
        """Run one provider call, converting any failure to a transient error."""
        try:
            return await self._provider.generate(request)
        except Exception as e:
            error = TransientProviderError(
                str(e) or type(e).__name__,
                provider=self._provider.provider_name,
                attempt=attempt,
                status_code=_status_code_of(e),
                original_error=e,
            )
            self._report_failure(error)
            raise error from e

    def _report_failure(self, error: TransientProviderError) -> None:
        is_last = error.attempt >= self._policy.max_attempts
        failure = AttemptFailure(
            attempt=error.attempt,
            max_attempts=self._policy.max_attempts,
            provider=error.provider,
            status_code=error.status_code,
            error=str(error),
            next_delay_seconds=None if is_last else self._policy.delay_after(error.attempt),
        )

        # Observability must never interrupt the retry loop; each sink fails alone
        with suppress(Exception):
            logger.warning(
                "Completion attempt failed",
                provider=failure.provider,
                attempt=failure.attempt,
                max_attempts=failure.max_attempts,
                status=failure.status_code,
                error=failure.error,
                next_delay_seconds=failure.next_delay_seconds,
            )
        if self._on_attempt_failed is not None:
            with suppress(Exception):
                self._on_attempt_failed(failure)

    def _report_success(self, response: CompletionResponse, attempt: int) -> None:
        success = CompletionSuccess(
            attempt=attempt,
            provider=response.provider or self._provider.provider_name,
            model=response.model or self._provider.default_model,
            latency_ms=response.latency_ms,
            finish_reason=response.finish_reason,
            total_tokens=response.total_tokens,
        )

        with suppress(Exception):
            logger.info(
                "Completion generated",
                provider=success.provider,
                model=success.model,
                attempt=success.attempt,
                latency_ms=success.latency_ms,
                finish_reason=success.finish_reason,
                total_tokens=success.total_tokens,
            )
        if self._on_completed is not None:
            with suppress(Exception):
                self._on_completed(success)


def _status_code_of(error: Exception) -> Optional[int]:
    """Best-effort upstream status for an attempt failure."""
    if isinstance(error, CompletionProviderError) and error.status_code is not None:
        return error.status_code
    for attr in ("status_code", "code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    return None
