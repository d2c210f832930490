"""Insight aggregation — similarity and risk labels from relations.

The only place the label thresholds live.  The state builder calls
``summarize_relations`` while the narrative aggregator calls
``aggregate_insights`` on a finished state; both go through the same
classification functions, so the labels can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Mapping

from app.narrative.comparator import Relation
from app.narrative.dimensions import DIMENSION_ORDER, DimensionKey

if TYPE_CHECKING:
    from app.narrative.state import ComparisonState


class SimilarityLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DifferenceBreadth(str, Enum):
    """How widely the two profiles differ, used to quantise wording."""

    MOST = "most"         # three or more very-different dimensions
    SEVERAL = "several"   # one or two very-different dimensions
    SOME = "some"         # only "different" dimensions
    NONE = "none"


# Label thresholds (counts of dimensions)
STRONG_DIFFERENCE_COUNT: int = 2    # very-different dims that flip the label
MODERATE_DIFFERENCE_COUNT: int = 2  # different dims that give a medium label
MAJORITY_DIFFERENCE_COUNT: int = 3  # very-different dims that read as "most"


@dataclass(frozen=True)
class AggregatedInsights:
    similar_dimensions: tuple[DimensionKey, ...]
    different_dimensions: tuple[DimensionKey, ...]
    very_different_dimensions: tuple[DimensionKey, ...]
    similarity_label: SimilarityLevel
    risk_label: RiskLevel
    breadth: DifferenceBreadth

    @property
    def risk_count_very_different(self) -> int:
        return len(self.very_different_dimensions)

    @property
    def similarities(self) -> tuple[DimensionKey, ...]:
        return self.similar_dimensions

    @property
    def differences(self) -> tuple[DimensionKey, ...]:
        """Very-different dimensions first, then merely different ones."""
        return self.very_different_dimensions + self.different_dimensions

    def to_dict(self) -> dict:
        return {
            "similar": [d.value for d in self.similar_dimensions],
            "different": [d.value for d in self.different_dimensions],
            "very_different": [d.value for d in self.very_different_dimensions],
            "similarity_label": self.similarity_label.value,
            "risk_label": self.risk_label.value,
            "risk_count_very_different": self.risk_count_very_different,
        }


def classify_similarity(very_different_count: int, different_count: int) -> SimilarityLevel:
    if very_different_count >= STRONG_DIFFERENCE_COUNT:
        return SimilarityLevel.LOW
    if very_different_count == 1 or different_count >= MODERATE_DIFFERENCE_COUNT:
        return SimilarityLevel.MEDIUM
    return SimilarityLevel.HIGH


def classify_risk(very_different_count: int, different_count: int) -> RiskLevel:
    if very_different_count >= STRONG_DIFFERENCE_COUNT:
        return RiskLevel.HIGH
    if very_different_count == 1 or different_count >= MODERATE_DIFFERENCE_COUNT:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def classify_breadth(very_different_count: int, different_count: int) -> DifferenceBreadth:
    if very_different_count >= MAJORITY_DIFFERENCE_COUNT:
        return DifferenceBreadth.MOST
    if very_different_count >= 1:
        return DifferenceBreadth.SEVERAL
    if different_count > 0:
        return DifferenceBreadth.SOME
    return DifferenceBreadth.NONE


def summarize_relations(relations: Mapping[DimensionKey, Relation]) -> AggregatedInsights:
    """Partition dimensions by relation (in ``DIMENSION_ORDER``) and label them.

    Dimensions missing from *relations* count as similar.
    """
    similar: list[DimensionKey] = []
    different: list[DimensionKey] = []
    very_different: list[DimensionKey] = []

    for dim in DIMENSION_ORDER:
        relation = relations.get(dim, Relation.SIMILAR)
        if relation is Relation.VERY_DIFFERENT:
            very_different.append(dim)
        elif relation is Relation.DIFFERENT:
            different.append(dim)
        else:
            similar.append(dim)

    vd_count, d_count = len(very_different), len(different)
    return AggregatedInsights(
        similar_dimensions=tuple(similar),
        different_dimensions=tuple(different),
        very_different_dimensions=tuple(very_different),
        similarity_label=classify_similarity(vd_count, d_count),
        risk_label=classify_risk(vd_count, d_count),
        breadth=classify_breadth(vd_count, d_count),
    )


def aggregate_insights(state: ComparisonState) -> AggregatedInsights:
    """Insights for a finished comparison state."""
    return summarize_relations(
        {dim: comparison.relation for dim, comparison in state.dimensions.items()}
    )
