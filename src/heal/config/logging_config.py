"""
Heal Logging Configuration

structlog over stdlib logging. Every event carries the service name,
version and, inside a request, its correlation ID.

PRIVACY: Chat content must never reach the logs. Credential-like keys
are masked and conversation-content keys are replaced by their length.
"""

import logging
import sys
from typing import Any, MutableMapping

import structlog

from heal import __version__
from heal.config.settings import Settings

SERVICE_NAME = "heal-backend"

# Substrings of keys whose values are masked
SECRET_KEY_MARKERS: tuple[str, ...] = (
    "password",
    "token",
    "secret",
    "api_key",
    "apikey",
    "authorization",
    "credential",
)

# Keys that would carry what the user wrote or what the companion replied
CONTENT_KEYS: frozenset[str] = frozenset({
    "message",
    "content",
    "history",
    "transcript",
    "user_content",
    "reply",
})

_NOISY_LOGGERS: tuple[str, ...] = (
    "uvicorn.access",
    "httpx",
    "httpcore",
    "openai",
    "google",
    "sqlalchemy.engine",
    "aiosqlite",
)


def _is_secret_key(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SECRET_KEY_MARKERS)


def _mask(key: str, value: Any) -> Any:
    if _is_secret_key(key):
        return "[REDACTED]"
    if isinstance(value, dict):
        return {k: _mask(k, v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_mask(key, item) for item in value]
    return value


def redact_secrets(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Mask values of credential-like keys, including nested ones."""
    return {key: _mask(key, value) for key, value in event_dict.items()}


def drop_chat_content(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Replace conversation content fields with their length."""
    for key in CONTENT_KEYS.intersection(event_dict):
        value = event_dict.pop(key)
        event_dict[f"{key}_length"] = len(value) if hasattr(value, "__len__") else None
    return event_dict


def add_service_context(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    event_dict["service"] = SERVICE_NAME
    event_dict["version"] = __version__
    return event_dict


def build_processors(json_output: bool) -> list[Any]:
    """
    Processor chain for the given output mode.

    The ``event`` key is the log message itself and is never treated
    as chat content.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        drop_chat_content,
        redact_secrets,
        add_service_context,
    ]

    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    return processors


def configure_logging(settings: Settings) -> None:
    """
    Configure structlog and the stdlib root logger.

    Console output in development, JSON lines elsewhere.
    """
    structlog.configure(
        processors=build_processors(json_output=settings.env != "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Attach the request correlation ID to every event in this context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
