"""
OpenAI chat-completions provider.

Also serves OpenAI-compatible proxies through ``base_url``. The
request maps to two messages: the system instructions and the
assembled transcript.
"""

import time
from typing import Optional

from openai import APIError, AsyncOpenAI, RateLimitError as OpenAIRateLimitError

from heal.config.logging_config import get_logger
from heal.infrastructure.llm.provider import (
    CompletionProvider,
    CompletionProviderError,
    CompletionRequest,
    CompletionResponse,
    ContentFilterError,
    RateLimitError,
)

logger = get_logger(__name__)


class OpenAIProvider(CompletionProvider):
    """The SDK client is created on first use so construction never touches the network."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = 512,
        base_url: Optional[str] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._base_url = base_url
        self._sdk: Optional[AsyncOpenAI] = None

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._model

    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def sdk(self) -> AsyncOpenAI:
        if self._sdk is None:
            self._sdk = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._sdk

    async def generate(self, request: CompletionRequest) -> CompletionResponse:
        if not self.is_configured():
            raise CompletionProviderError("OpenAI API key not configured", provider="openai")

        started = time.perf_counter()
        try:
            completion = await self.sdk.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": request.system_instructions},
                    {"role": "user", "content": request.user_content},
                ],
                max_tokens=request.max_tokens or self._max_tokens,
                temperature=request.temperature,
            )
        except OpenAIRateLimitError as e:
            raise RateLimitError(provider="openai") from e
        except APIError as e:
            raise CompletionProviderError(
                f"OpenAI API error: {e}",
                provider="openai",
                is_retryable=True,
                status_code=getattr(e, "status_code", None),
                original_error=e,
            ) from e
        latency_ms = int((time.perf_counter() - started) * 1000)

        choice = completion.choices[0]
        if choice.finish_reason == "content_filter":
            raise ContentFilterError(
                provider="openai",
                filter_reason="Content was filtered by OpenAI safety systems",
            )

        return CompletionResponse(
            content=choice.message.content or "",
            finish_reason=choice.finish_reason or "stop",
            total_tokens=completion.usage.total_tokens if completion.usage is not None else None,
            model=self._model,
            provider="openai",
            latency_ms=latency_ms,
        )

    async def health_check(self) -> bool:
        if not self.is_configured():
            return False
        try:
            await self.sdk.models.list()
        except APIError as e:
            logger.warning("OpenAI health check failed", error_type=type(e).__name__)
            return False
        return True
