"""
Crisis Severity Enumeration

CLINICAL_REVIEW_REQUIRED: Severity definitions drive which safety
response is issued and must be validated by mental health professionals.
"""

from enum import StrEnum


class CrisisSeverity(StrEnum):
    """
    Coarse crisis risk classification for a single message.

    Values are the wire and storage labels. Ordering goes through
    ``rank``, since string comparison of the labels is meaningless.
    """

    NONE = "none"
    """No crisis phrase detected."""

    MEDIUM = "medium"
    """
    Indirect distress language (hopelessness, worthlessness).
    Crisis protocol is still activated.
    """

    HIGH = "high"
    """
    Direct self-harm or suicide language.

    SAFETY_NOTE: Crisis line information must always reach the user.
    """

    @property
    def rank(self) -> int:
        """0 for none, 1 for medium, 2 for high."""
        return _RANKS[self]


_RANKS: dict[CrisisSeverity, int] = {
    CrisisSeverity.NONE: 0,
    CrisisSeverity.MEDIUM: 1,
    CrisisSeverity.HIGH: 2,
}
