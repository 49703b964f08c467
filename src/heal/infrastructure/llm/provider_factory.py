"""
Completion Provider Factory

Builds the process-wide completion provider from settings at startup.
The result is injected into the completion client; nothing reads the
environment after this point.

CONFIGURATION:
    HEAL_LLM_PRIMARY_PROVIDER=gemini  # or: openai
    HEAL_GEMINI_API_KEY=...           # empty => provider unavailable
"""

from enum import StrEnum
from typing import Optional

from heal.config.logging_config import get_logger
from heal.config.settings import Settings
from heal.infrastructure.llm.provider import CompletionProvider

logger = get_logger(__name__)


class LLMProviderType(StrEnum):
    """Supported completion provider types."""

    GEMINI = "gemini"
    OPENAI = "openai"


def build_completion_provider(settings: Settings) -> Optional[CompletionProvider]:
    """
    Construct the configured completion provider.

    Args:
        settings: Application settings

    Returns:
        Provider instance, or None when its credential is missing

    Raises:
        ValueError: If the provider type is unknown
    """
    provider_type = LLMProviderType(settings.llm_primary_provider)
    provider = _create_provider(provider_type, settings)

    if not provider.is_configured():
        logger.warning(
            "Completion provider credential missing, AI features degraded",
            provider=provider_type.value,
        )
        return None

    logger.info(
        "Completion provider initialized",
        provider=provider_type.value,
        model=provider.default_model,
    )
    return provider


def _create_provider(provider_type: LLMProviderType, settings: Settings) -> CompletionProvider:
    """Create provider instance by type."""
    if provider_type == LLMProviderType.GEMINI:
        from heal.infrastructure.llm.gemini_provider import GeminiProvider
        return GeminiProvider(
            api_key=settings.gemini.api_key.get_secret_value(),
            model=settings.gemini.model,
            max_tokens=settings.gemini.max_output_tokens,
            temperature=settings.gemini.temperature,
        )

    elif provider_type == LLMProviderType.OPENAI:
        from heal.infrastructure.llm.openai_provider import OpenAIProvider
        return OpenAIProvider(
            api_key=settings.openai.api_key.get_secret_value(),
            model=settings.openai.model,
            max_tokens=settings.openai.max_tokens,
            base_url=settings.openai.base_url,
        )

    else:
        raise ValueError(f"Unknown provider type: {provider_type}")
