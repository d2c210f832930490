"""Per-dimension comparison of two scores.

For one dimension, reduces a pair of scores to the rounded absolute delta,
a three-way relation (similar / different / very different), a direction
(who scores higher) and each person's level.  Pure and total: unknown scores
produce an invalid comparison instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from app.narrative.dimensions import DimensionKey, Level, level_of
from app.narrative.scores import Known, Score, parse_score


class Relation(str, Enum):
    SIMILAR = "similar"
    DIFFERENT = "different"
    VERY_DIFFERENT = "very_different"


class Direction(str, Enum):
    A_HIGHER = "A_higher"
    B_HIGHER = "B_higher"
    NONE = "none"


DIFFERENT_THRESHOLD: float = 0.8        # delta >= 0.8 -> different
VERY_DIFFERENT_THRESHOLD: float = 1.6   # delta >= 1.6 -> very different
DIRECTION_EPSILON: float = 0.1          # |a - b| below this -> no direction


@dataclass(frozen=True)
class DimensionComparison:
    """Comparison of both people on a single dimension."""

    dimension: DimensionKey
    a_score: Score
    b_score: Score
    delta: float
    relation: Relation
    direction: Direction
    a_level: Level | None     # None when A's score is unknown
    b_level: Level | None
    valid: bool               # both scores known

    def to_dict(self) -> dict:
        return {
            "dimension": self.dimension.value,
            "a_score": self.a_score.value if isinstance(self.a_score, Known) else None,
            "b_score": self.b_score.value if isinstance(self.b_score, Known) else None,
            "delta": self.delta,
            "relation": self.relation.value,
            "direction": self.direction.value,
            "a_level": self.a_level.value if self.a_level else None,
            "b_level": self.b_level.value if self.b_level else None,
            "valid": self.valid,
        }


def round_delta(a: float, b: float) -> float:
    """Absolute difference rounded half-up to one decimal place."""
    return math.floor(abs(a - b) * 10 + 0.5) / 10


def classify_relation(delta: float) -> Relation:
    if delta >= VERY_DIFFERENT_THRESHOLD:
        return Relation.VERY_DIFFERENT
    if delta >= DIFFERENT_THRESHOLD:
        return Relation.DIFFERENT
    return Relation.SIMILAR


def classify_direction(a: float, b: float) -> Direction:
    # Rounded so that float noise (e.g. 2.1 - 2.0) does not push an exact
    # 0.1 gap under the epsilon.
    if round(abs(a - b), 9) < DIRECTION_EPSILON:
        return Direction.NONE
    return Direction.A_HIGHER if a > b else Direction.B_HIGHER


def compare_dimension(
    dimension: DimensionKey,
    a_score: Score | float | None,
    b_score: Score | float | None,
) -> DimensionComparison:
    """Compare two scores on *dimension*.

    Raw numbers and ``None`` are accepted and parsed, so callers holding
    plain floats do not need to wrap them.
    """
    a = parse_score(a_score)
    b = parse_score(b_score)

    a_level = level_of(a.value) if isinstance(a, Known) else None
    b_level = level_of(b.value) if isinstance(b, Known) else None

    if not (isinstance(a, Known) and isinstance(b, Known)):
        return DimensionComparison(
            dimension=dimension,
            a_score=a,
            b_score=b,
            delta=0.0,
            relation=Relation.SIMILAR,
            direction=Direction.NONE,
            a_level=a_level,
            b_level=b_level,
            valid=False,
        )

    delta = round_delta(a.value, b.value)
    return DimensionComparison(
        dimension=dimension,
        a_score=a,
        b_score=b,
        delta=delta,
        relation=classify_relation(delta),
        direction=classify_direction(a.value, b.value),
        a_level=a_level,
        b_level=b_level,
        valid=True,
    )
