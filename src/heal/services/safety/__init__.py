"""
Safety Services

Crisis phrase detection for the companion chat.

SAFETY-CRITICAL: Changes here affect whether a user in crisis
receives the 988 Suicide & Crisis Lifeline information.
"""

from heal.services.safety.crisis_detector import (
    DEFAULT_CRISIS_RULES,
    CrisisDetector,
    CrisisRule,
)

__all__ = [
    "CrisisDetector",
    "CrisisRule",
    "DEFAULT_CRISIS_RULES",
]
