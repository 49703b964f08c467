"""Completion provider abstraction package."""

from heal.infrastructure.llm.provider import (
    CompletionProvider,
    CompletionProviderError,
    CompletionRequest,
    CompletionResponse,
    ContentFilterError,
    ExhaustedRetriesError,
    ProviderUnavailableError,
    RateLimitError,
    TransientProviderError,
)
from heal.infrastructure.llm.provider_factory import LLMProviderType, build_completion_provider

__all__ = [
    # Base types
    "CompletionProvider",
    "CompletionRequest",
    "CompletionResponse",
    # Errors
    "CompletionProviderError",
    "ProviderUnavailableError",
    "TransientProviderError",
    "ExhaustedRetriesError",
    "RateLimitError",
    "ContentFilterError",
    # Factory
    "build_completion_provider",
    "LLMProviderType",
]
