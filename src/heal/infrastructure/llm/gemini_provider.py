"""
Google Gemini completion provider (google-generativeai SDK).

System instructions go through the model's native ``system_instruction``;
the assembled transcript is sent as the single user content part.
"""

import time
from typing import Any, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig, HarmBlockThreshold, HarmCategory

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

# The companion has to discuss self-harm, so only high-probability harm is blocked
_SAFETY_SETTINGS = {
    category: HarmBlockThreshold.BLOCK_ONLY_HIGH
    for category in (
        HarmCategory.HARM_CATEGORY_HARASSMENT,
        HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
}

_QUOTA_MARKERS = ("quota", "rate limit", "resource exhausted", "resource_exhausted")


class GeminiProvider(CompletionProvider):
    """
    Gemini backend for companion chat, summaries and wellness tools.

    An empty ``api_key`` leaves the provider unconfigured; the factory
    then reports no provider at all.
    """

    DEFAULT_MODEL = "gemini-1.5-flash"
    DEFAULT_MAX_TOKENS = 512
    DEFAULT_TEMPERATURE = 0.7

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> None:
        self._model = model or self.DEFAULT_MODEL
        self._max_tokens = max_tokens or self.DEFAULT_MAX_TOKENS
        self._temperature = self.DEFAULT_TEMPERATURE if temperature is None else temperature
        self._configured = bool(api_key)
        if self._configured:
            genai.configure(api_key=api_key)

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return self._model

    def is_configured(self) -> bool:
        return self._configured

    async def generate(self, request: CompletionRequest) -> CompletionResponse:
        if not self._configured:
            raise CompletionProviderError("Gemini API key not configured", provider="gemini")

        model = genai.GenerativeModel(
            model_name=self._model,
            safety_settings=_SAFETY_SETTINGS,
            system_instruction=request.system_instructions,
        )
        config = GenerationConfig(
            max_output_tokens=request.max_tokens or self._max_tokens,
            temperature=self._temperature if request.temperature is None else request.temperature,
        )

        started = time.perf_counter()
        try:
            response = await model.generate_content_async(
                request.user_content,
                generation_config=config,
            )
        except Exception as e:
            raise self._translate_error(e) from e
        latency_ms = int((time.perf_counter() - started) * 1000)

        content = self._extract_text(response)
        return CompletionResponse(
            content=content,
            finish_reason=_finish_reason_of(response),
            total_tokens=_total_tokens_of(response),
            model=self._model,
            provider="gemini",
            latency_ms=latency_ms,
        )

    def _extract_text(self, response: Any) -> str:
        """Joined text of the first candidate; raises if safety blocked it."""
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(feedback, "block_reason", None) if feedback else None
        if block_reason:
            logger.warning("Gemini prompt blocked", reason=str(block_reason))
            raise ContentFilterError(provider="gemini", filter_reason=str(block_reason))

        if not response.candidates:
            return ""

        candidate = response.candidates[0]
        if "SAFETY" in str(getattr(candidate, "finish_reason", "")):
            raise ContentFilterError(
                provider="gemini",
                filter_reason="Response blocked by safety filters",
            )
        if not (candidate.content and candidate.content.parts):
            return ""
        return "".join(part.text for part in candidate.content.parts if part.text)

    def _translate_error(self, error: Exception) -> CompletionProviderError:
        text = str(error).lower()
        code = getattr(error, "code", None)
        status_code = code if isinstance(code, int) else None

        if status_code == 429 or any(marker in text for marker in _QUOTA_MARKERS):
            return RateLimitError(provider="gemini")
        if "safety" in text or "blocked" in text:
            return ContentFilterError(provider="gemini", filter_reason=str(error))
        return CompletionProviderError(
            f"Gemini API error: {error}",
            provider="gemini",
            is_retryable=True,
            status_code=status_code,
            original_error=error,
        )

    async def health_check(self) -> bool:
        if not self._configured:
            return False
        try:
            next(iter(genai.list_models()), None)
        except Exception as e:
            logger.warning("Gemini health check failed", error_type=type(e).__name__)
            return False
        return True


def _finish_reason_of(response: Any) -> str:
    """Lower-cased finish reason of the first candidate, ``stop`` if absent."""
    if not response.candidates:
        return "stop"
    reason = getattr(response.candidates[0], "finish_reason", None)
    name = getattr(reason, "name", None) or (str(reason) if reason else "STOP")
    return name.lower()


def _total_tokens_of(response: Any) -> Optional[int]:
    metadata = getattr(response, "usage_metadata", None)
    total = getattr(metadata, "total_token_count", None)
    return total if isinstance(total, int) else None
