"""
Severity normalization and ranking.

Citizens describe severity in free text ("Emergency spill", "moderate
littering"). Before anything is stored or aggregated it is mapped onto the
four canonical levels the map colour-codes by.
"""

from enum import Enum
from typing import Optional


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


SEVERITY_RANK = {
    Severity.CRITICAL.value: 4,
    Severity.HIGH.value: 3,
    Severity.MEDIUM.value: 2,
    Severity.LOW.value: 1,
}

# Checked in order: the first keyword group found in the text wins.
SEVERITY_KEYWORDS = (
    (Severity.CRITICAL, ("critical", "emergency")),
    (Severity.HIGH, ("high", "severe")),
    (Severity.MEDIUM, ("medium", "moderate")),
)


def normalize_severity(text: Optional[str]) -> str:
    """
    Map free-text severity onto low/medium/high/critical by substring match.

    Anything unmatched, empty or None becomes "low".
    """
    if not text:
        return Severity.LOW.value
    lowered = str(text).lower()
    for level, keywords in SEVERITY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return level.value
    return Severity.LOW.value


def severity_rank(severity: Optional[str]) -> int:
    """Rank of a canonical severity; unknown or missing values rank 0."""
    if not severity:
        return 0
    return SEVERITY_RANK.get(str(severity).lower(), 0)


def higher_severity(current: Optional[str], incoming: Optional[str]) -> Optional[str]:
    """Return whichever severity ranks higher, keeping `current` on ties."""
    if severity_rank(incoming) > severity_rank(current):
        return incoming
    return current
