"""
Completion provider contract and error hierarchy.

A provider turns one ``CompletionRequest`` into one upstream call.
Retries, backoff and fallbacks belong to the resilient completion
client in ``heal.services.llm``, never to the provider.

Error taxonomy:
    ProviderUnavailableError  nothing configured; fail fast
    TransientProviderError    one attempt failed; the client retries
    ExhaustedRetriesError     the whole retry budget is spent
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CompletionRequest:
    """System instructions plus the text to complete."""

    system_instructions: str
    user_content: str
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


@dataclass
class CompletionResponse:
    """Generated text plus the upstream bookkeeping logged on success."""

    content: str
    finish_reason: str = "stop"
    total_tokens: Optional[int] = None
    model: str = ""
    provider: str = ""
    latency_ms: int = 0



class CompletionProviderError(Exception):
    """
    Raised by providers and by the completion client.

    ``is_retryable`` is advisory: the client retries every attempt
    failure regardless, but logs it.
    """

    def __init__(
        self,
        message: str,
        provider: str,
        is_retryable: bool = False,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.is_retryable = is_retryable
        self.status_code = status_code
        self.original_error = original_error


class ProviderUnavailableError(CompletionProviderError):
    def __init__(self, provider: str = "none") -> None:
        super().__init__(
            "Completion provider is not configured",
            provider=provider,
        )


class TransientProviderError(CompletionProviderError):
    """One failed attempt, numbered from 1."""

    def __init__(
        self,
        message: str,
        provider: str,
        attempt: int,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message,
            provider=provider,
            is_retryable=True,
            status_code=status_code,
            original_error=original_error,
        )
        self.attempt = attempt


class ExhaustedRetriesError(CompletionProviderError):
    def __init__(self, provider: str, attempts: int, last_error: Any) -> None:
        super().__init__(
            f"Completion failed after {attempts} attempts: {last_error}",
            provider=provider,
            status_code=getattr(last_error, "status_code", None),
            original_error=last_error if isinstance(last_error, Exception) else None,
        )
        self.attempts = attempts
        self.last_error = last_error


class RateLimitError(CompletionProviderError):
    """Upstream returned 429 or reported an exhausted quota."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            is_retryable=True,
            status_code=429,
        )


class ContentFilterError(CompletionProviderError):
    """Upstream safety filters blocked the prompt or the output."""

    def __init__(self, provider: str, filter_reason: str = "") -> None:
        super().__init__(
            f"Content filtered by {provider}: {filter_reason}",
            provider=provider,
        )
        self.filter_reason = filter_reason


class CompletionProvider(ABC):
    """
    One text-completion backend.

    Implementations must not retry and must not log request content.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str: ...

    @property
    @abstractmethod
    def default_model(self) -> str: ...

    @abstractmethod
    def is_configured(self) -> bool:
        """True when a credential is present."""

    @abstractmethod
    async def generate(self, request: CompletionRequest) -> CompletionResponse:
        """
        Make exactly one upstream call.

        Raises:
            CompletionProviderError: Or any client library exception;
                the completion client treats both as a failed attempt
        """

    @abstractmethod
    async def health_check(self) -> bool: ...
