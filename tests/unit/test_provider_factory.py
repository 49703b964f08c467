"""
Unit Tests for Settings and Completion Provider Factory
"""

from heal.config import Settings
from heal.config.settings import GeminiSettings, OpenAISettings, RetrySettings
from heal.infrastructure.llm.gemini_provider import GeminiProvider
from heal.infrastructure.llm.openai_provider import OpenAIProvider
from heal.infrastructure.llm.provider_factory import build_completion_provider
from heal.services.llm.completion_client import RetryPolicy


class TestSettings:
    """Test suite for Settings defaults."""

    def test_retry_defaults_match_policy_defaults(self) -> None:
        assert RetryPolicy.from_settings(RetrySettings()) == RetryPolicy()

    def test_secrets_not_rendered(self) -> None:
        settings = Settings(gemini=GeminiSettings(api_key="super-secret-key"))

        assert "super-secret-key" not in repr(settings)
        assert settings.gemini.api_key.get_secret_value() == "super-secret-key"

    def test_database_urls(self, test_settings: Settings) -> None:
        assert test_settings.database.async_url.startswith("postgresql+asyncpg://")
        assert test_settings.database.sync_url.startswith("postgresql://")


class TestBuildCompletionProvider:
    """Test suite for build_completion_provider."""

    def test_missing_gemini_key_means_unavailable(self) -> None:
        settings = Settings(llm_primary_provider="gemini", gemini=GeminiSettings(api_key=""))

        assert build_completion_provider(settings) is None

    def test_missing_openai_key_means_unavailable(self) -> None:
        settings = Settings(llm_primary_provider="openai", openai=OpenAISettings(api_key=""))

        assert build_completion_provider(settings) is None

    def test_gemini_provider(self) -> None:
        settings = Settings(
            llm_primary_provider="gemini",
            gemini=GeminiSettings(api_key="test-key", model="gemini-1.5-pro"),
        )

        provider = build_completion_provider(settings)

        assert isinstance(provider, GeminiProvider)
        assert provider.default_model == "gemini-1.5-pro"
        assert provider.is_configured()

    def test_openai_provider(self) -> None:
        settings = Settings(
            llm_primary_provider="openai",
            openai=OpenAISettings(api_key="sk-test", base_url="http://localhost:9999/v1"),
        )

        provider = build_completion_provider(settings)

        assert isinstance(provider, OpenAIProvider)
        assert provider.provider_name == "openai"
