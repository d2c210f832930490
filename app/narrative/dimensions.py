"""Mind Compare — psychometric dimension definitions.

The four rumination dimensions scored by the quiz, the two ordering
constants used throughout the comparison engine, and the score-to-level
discretisation shared by every rendering surface.
"""

from __future__ import annotations

from enum import Enum


class DimensionKey(str, Enum):
    """Closed set of scored dimensions."""

    STICKINESS = "stickiness"
    PAST_BROODING = "past_brooding"
    FUTURE_WORRY = "future_worry"
    INTERPERSONAL = "interpersonal"


class Level(str, Enum):
    """Coarse discretisation of a single person's raw score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ---------------------------------------------------------------------------
# Ordering constants
# ---------------------------------------------------------------------------
# Order in which dimensions are listed in every output (mental map, lists,
# share text).
DIMENSION_ORDER: tuple[DimensionKey, ...] = (
    DimensionKey.STICKINESS,
    DimensionKey.PAST_BROODING,
    DimensionKey.FUTURE_WORRY,
    DimensionKey.INTERPERSONAL,
)

# Tie-break order for the dominant dimension.  Kept separate from
# DIMENSION_ORDER so the two can change independently.
DOMINANT_PRIORITY: tuple[DimensionKey, ...] = (
    DimensionKey.STICKINESS,
    DimensionKey.PAST_BROODING,
    DimensionKey.FUTURE_WORRY,
    DimensionKey.INTERPERSONAL,
)

# Global safety / confidence templates are filed under this dimension.
ANCHOR_DIMENSION: DimensionKey = DimensionKey.INTERPERSONAL

# ---------------------------------------------------------------------------
# Score range and level bands
# ---------------------------------------------------------------------------
SCORE_MIN: float = 0.0
SCORE_MAX: float = 4.0

LOW_LEVEL_MAX: float = 1.3      # score <= 1.3 -> low
MEDIUM_LEVEL_MAX: float = 2.6   # score <= 2.6 -> medium, above -> high

# ---------------------------------------------------------------------------
# Display labels
# ---------------------------------------------------------------------------
DIMENSION_TITLES: dict[DimensionKey, str] = {
    DimensionKey.STICKINESS: "Mental stickiness",
    DimensionKey.PAST_BROODING: "Brooding over the past",
    DimensionKey.FUTURE_WORRY: "Worry about the future",
    DimensionKey.INTERPERSONAL: "Reading other people",
}

# Short noun phrases used inside the headline sentence.
DIMENSION_HEADLINE_LABELS: dict[DimensionKey, str] = {
    DimensionKey.STICKINESS: "how thoughts are let go of",
    DimensionKey.PAST_BROODING: "how the past is handled",
    DimensionKey.FUTURE_WORRY: "how the future is faced",
    DimensionKey.INTERPERSONAL: "how other people's behaviour is interpreted",
}

LEVEL_LABELS: dict[Level, str] = {
    Level.LOW: "low",
    Level.MEDIUM: "medium",
    Level.HIGH: "high",
}


def level_of(score: float) -> Level:
    """Map a raw 0–4 score onto low / medium / high (monotone)."""
    if score <= LOW_LEVEL_MAX:
        return Level.LOW
    if score <= MEDIUM_LEVEL_MAX:
        return Level.MEDIUM
    return Level.HIGH
