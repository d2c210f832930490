"""Comparison state builder.

Runs the per-dimension comparator for every dimension and folds the results
into one immutable ``ComparisonState``: the dominant dimension (with tie
detection), the confidence flags and the similarity / risk labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

import structlog

from app.narrative.comparator import DimensionComparison, Relation, compare_dimension
from app.narrative.dimensions import DIMENSION_ORDER, DOMINANT_PRIORITY, DimensionKey
from app.narrative.insights import RiskLevel, SimilarityLevel, summarize_relations
from app.narrative.scores import UNKNOWN

logger = structlog.get_logger(__name__)

TIE_EPSILON: float = 0.01
FULL_CONFIDENCE_MIN_VALID: int = 4   # fewer valid dimensions -> low confidence
LOW_CONFIDENCE_MIN_VALID: int = 2    # fewer valid dimensions -> very low confidence


@dataclass(frozen=True)
class ComparisonState:
    name_a: str
    name_b: str
    dominant_dimension: DimensionKey
    dominant_tied: bool
    similarity_label: SimilarityLevel
    risk_label: RiskLevel
    risk_count_very_different: int
    dimensions: Mapping[DimensionKey, DimensionComparison]
    low_confidence: bool
    very_low_confidence: bool

    @property
    def valid_count(self) -> int:
        return sum(1 for c in self.dimensions.values() if c.valid)

    @property
    def dominant(self) -> DimensionComparison:
        return self.dimensions[self.dominant_dimension]

    def dimension(self, key: DimensionKey) -> DimensionComparison:
        return self.dimensions[key]

    def to_dict(self) -> dict:
        return {
            "name_a": self.name_a,
            "name_b": self.name_b,
            "dominant_dimension": self.dominant_dimension.value,
            "dominant_tied": self.dominant_tied,
            "similarity_label": self.similarity_label.value,
            "risk_label": self.risk_label.value,
            "risk_count_very_different": self.risk_count_very_different,
            "low_confidence": self.low_confidence,
            "very_low_confidence": self.very_low_confidence,
            "dimensions": [self.dimensions[d].to_dict() for d in DIMENSION_ORDER],
        }


def select_dominant_dimension(
    comparisons: Mapping[DimensionKey, DimensionComparison],
) -> tuple[DimensionKey, bool]:
    """Return ``(dominant_dimension, tied)``.

    1. take the largest delta over valid dimensions;
    2. every valid dimension within ``TIE_EPSILON`` of it is a candidate;
    3. if any candidate is very different, keep only those;
    4. pick the first remaining candidate by ``DOMINANT_PRIORITY``.

    ``tied`` reflects the candidate count of step 2, before narrowing.
    """
    valid = [c for c in comparisons.values() if c.valid]
    if not valid:
        return DOMINANT_PRIORITY[0], False

    max_delta = max(c.delta for c in valid)
    candidates = [c for c in valid if abs(c.delta - max_delta) < TIE_EPSILON]
    tied = len(candidates) > 1

    strongest = [c for c in candidates if c.relation is Relation.VERY_DIFFERENT]
    if strongest:
        candidates = strongest

    remaining = {c.dimension for c in candidates}
    for dim in DOMINANT_PRIORITY:
        if dim in remaining:
            return dim, tied

    # DOMINANT_PRIORITY covers every DimensionKey
    raise AssertionError("dominant candidate outside DOMINANT_PRIORITY")


def build_comparison_state(
    comparisons: Mapping[DimensionKey, DimensionComparison],
    name_a: str,
    name_b: str,
) -> ComparisonState:
    """Fold per-dimension comparisons into a ``ComparisonState``.

    Dimensions missing from *comparisons* are treated as unknown on both
    sides.
    """
    full = {
        dim: comparisons.get(dim) or compare_dimension(dim, UNKNOWN, UNKNOWN)
        for dim in DIMENSION_ORDER
    }

    dominant, tied = select_dominant_dimension(full)
    insights = summarize_relations({dim: c.relation for dim, c in full.items()})
    valid_count = sum(1 for c in full.values() if c.valid)

    state = ComparisonState(
        name_a=name_a,
        name_b=name_b,
        dominant_dimension=dominant,
        dominant_tied=tied,
        similarity_label=insights.similarity_label,
        risk_label=insights.risk_label,
        risk_count_very_different=insights.risk_count_very_different,
        dimensions=MappingProxyType(full),
        low_confidence=valid_count < FULL_CONFIDENCE_MIN_VALID,
        very_low_confidence=valid_count < LOW_CONFIDENCE_MIN_VALID,
    )
    logger.debug(
        "compare.state_built",
        dominant=dominant.value,
        tied=tied,
        valid_count=valid_count,
        similarity=state.similarity_label.value,
        risk=state.risk_label.value,
    )
    return state


def compare_profiles(
    scores_a: Mapping[DimensionKey, Any],
    scores_b: Mapping[DimensionKey, Any],
    name_a: str,
    name_b: str,
) -> ComparisonState:
    """Compare two score maps (parsed or raw) and build the state."""
    comparisons = {
        dim: compare_dimension(dim, scores_a.get(dim), scores_b.get(dim))
        for dim in DIMENSION_ORDER
    }
    return build_comparison_state(comparisons, name_a, name_b)
