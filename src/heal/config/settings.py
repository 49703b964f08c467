"""
Heal runtime configuration (pydantic-settings).

Every value comes from the environment (or a local ``.env``) under the
``HEAL_`` prefix; nested groups use their own prefix, for example
``HEAL_GEMINI_API_KEY`` or ``HEAL_RETRY_MAX_ATTEMPTS``.

SECURITY: Credentials are SecretStr and must not be logged.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection; ``HEAL_DB_URL`` overrides the parts."""

    model_config = SettingsConfigDict(env_prefix="HEAL_DB_")

    url: Optional[SecretStr] = None
    host: str = "localhost"
    port: int = 5432
    name: str = "heal_db"
    user: str = "heal_user"
    password: SecretStr = SecretStr("dev_password")
    pool_size: int = Field(default=10, ge=1, le=100)
    max_overflow: int = Field(default=20, ge=0, le=100)

    def _dsn(self, scheme: str) -> str:
        secret = self.password.get_secret_value()
        return f"{scheme}://{self.user}:{secret}@{self.host}:{self.port}/{self.name}"

    @property
    def async_url(self) -> str:
        if self.url is not None:
            return self.url.get_secret_value()
        return self._dsn("postgresql+asyncpg")

    @property
    def sync_url(self) -> str:
        """Driver-less URL for Alembic."""
        return self._dsn("postgresql")


class GeminiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HEAL_GEMINI_")

    api_key: SecretStr = SecretStr("")
    model: str = "gemini-1.5-flash"
    max_output_tokens: int = Field(default=512, ge=64, le=8192)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)


class OpenAISettings(BaseSettings):
    """OpenAI or any OpenAI-compatible proxy reachable at ``base_url``."""

    model_config = SettingsConfigDict(env_prefix="HEAL_OPENAI_")

    api_key: SecretStr = SecretStr("")
    base_url: Optional[str] = None
    model: str = "gpt-4o-mini"
    max_tokens: int = Field(default=512, ge=64, le=4096)


class RetrySettings(BaseSettings):
    """
    Completion retry budget.

    Waits grow as ``base_delay_seconds * multiplier ** (attempt - 1)``;
    the defaults give 2, 4, 8 and 16 seconds between five attempts.
    """

    model_config = SettingsConfigDict(env_prefix="HEAL_RETRY_")

    max_attempts: int = Field(default=5, ge=1, le=10)
    base_delay_seconds: float = Field(default=2.0, ge=0.0, le=60.0)
    multiplier: float = Field(default=2.0, ge=1.0, le=10.0)


class Settings(BaseSettings):
    """
    Top-level settings for the API process.

    Tests build ``Settings(...)`` directly and pass it to
    ``create_application`` instead of reading the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Environment = "development"
    # Never enable in production: echoes SQL
    debug: bool = False
    log_level: LogLevel = "INFO"
    api_version: str = "v1"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:8081"])

    # Backs companion chat, analytics insights and the wellness tools
    llm_primary_provider: Literal["gemini", "openai"] = "gemini"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)

    def is_production(self) -> bool:
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """Environment settings, loaded once per process."""
    return Settings()
