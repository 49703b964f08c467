"""
Crisis Detector

Scans a chat message for suicide and self-harm phrases and classifies
the result as none / medium / high severity.

SAFETY-CRITICAL: False negatives are worse than false positives.
Matching is raw substring containment, so "hopelessly devoted" still
triggers the crisis protocol. Any tightening (e.g. word boundaries)
must be signed off by the product and clinical owners first.

CLINICAL_VALIDATION_REQUIRED: Phrase list and severity tiers.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from heal.domain.enums.crisis_severity import CrisisSeverity
from heal.domain.models.crisis import CrisisAssessment


@dataclass(frozen=True)
class CrisisRule:
    """
    A single crisis phrase tagged with the severity it implies.

    Attributes:
        phrase: Lowercase substring to look for
        severity: Severity reported when this rule wins
    """

    phrase: str
    severity: CrisisSeverity

    def matches(self, normalized_text: str) -> bool:
        return self.phrase in normalized_text


# Direct self-harm / suicide language
HIGH_SEVERITY_PHRASES: tuple[str, ...] = (
    "kill myself",
    "end my life",
    "suicide",
    "want to die",
    "hurt myself",
)

# Indirect distress language
MEDIUM_SEVERITY_PHRASES: tuple[str, ...] = (
    "don't want to live",
    "self harm",
    "self-harm",
    "no reason to live",
    "end it all",
    "give up on life",
    "better off dead",
    "can't go on",
    "hopeless",
    "worthless",
)

def rank_rules(rules: Iterable[CrisisRule]) -> tuple[CrisisRule, ...]:
    """
    Order rules by descending severity rank.

    The sort is stable, so phrase order within one severity is kept.
    """
    return tuple(sorted(rules, key=lambda rule: rule.severity.rank, reverse=True))


# Evaluation order is the priority order: every high rule outranks
# every medium rule, so a message containing both is always high.
DEFAULT_CRISIS_RULES: tuple[CrisisRule, ...] = rank_rules(
    [CrisisRule(phrase, CrisisSeverity.MEDIUM) for phrase in MEDIUM_SEVERITY_PHRASES]
    + [CrisisRule(phrase, CrisisSeverity.HIGH) for phrase in HIGH_SEVERITY_PHRASES]
)


def normalize_message(message: str) -> str:
    """Lowercase and fold typographic apostrophes to ASCII."""
    return message.lower().replace("’", "'").replace("‘", "'")


class CrisisDetector:
    """
    Ranked-rule crisis phrase detector.

    Rules are evaluated in order and the first match wins. The
    detector is pure and holds no mutable state, so one instance
    can serve all concurrent requests.

    Usage:
        detector = CrisisDetector()
        assessment = detector.detect("I feel hopeless")
    """

    def __init__(self, rules: Optional[Iterable[CrisisRule]] = None) -> None:
        """
        Initialize detector.

        Args:
            rules: Ranked rules, highest priority first
        """
        self._rules: tuple[CrisisRule, ...] = tuple(rules) if rules is not None else DEFAULT_CRISIS_RULES

    @property
    def rules(self) -> tuple[CrisisRule, ...]:
        """Rules in evaluation (priority) order."""
        return self._rules

    def detect(self, message: str) -> CrisisAssessment:
        """
        Classify a message.

        Args:
            message: Raw user message

        Returns:
            CrisisAssessment for the first matching rule, or a clear
            assessment when no rule matches
        """
        if not message:
            return CrisisAssessment.clear()

        normalized = normalize_message(message)

        for rule in self._rules:
            if rule.matches(normalized):
                return CrisisAssessment(
                    is_crisis=True,
                    severity=rule.severity,
                    matched_phrase=rule.phrase,
                )

        return CrisisAssessment.clear()
