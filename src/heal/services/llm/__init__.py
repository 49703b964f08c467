"""Resilient completion client and retry policy."""

from heal.services.llm.completion_client import (
    AttemptFailure,
    CompletionSuccess,
    ResilientCompletionClient,
    RetryPolicy,
)

__all__ = [
    "AttemptFailure",
    "CompletionSuccess",
    "ResilientCompletionClient",
    "RetryPolicy",
]
