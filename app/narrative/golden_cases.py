"""Reference profile pairs used by the regression tests and the golden-case
script.  Scores are listed in ``DIMENSION_ORDER``; ``None`` is a missing
score.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.narrative.dimensions import DIMENSION_ORDER, DimensionKey


@dataclass(frozen=True)
class GoldenCase:
    name: str
    description: str
    scores_a: tuple[float | None, ...]
    scores_b: tuple[float | None, ...]

    def score_map_a(self) -> dict[DimensionKey, float | None]:
        return dict(zip(DIMENSION_ORDER, self.scores_a))

    def score_map_b(self) -> dict[DimensionKey, float | None]:
        return dict(zip(DIMENSION_ORDER, self.scores_b))


GOLDEN_CASES: tuple[GoldenCase, ...] = (
    GoldenCase(
        name="all_very_different",
        description="A low everywhere, B high everywhere",
        scores_a=(0.5, 0.5, 0.5, 0.5),
        scores_b=(3.5, 3.5, 3.5, 3.5),
    ),
    GoldenCase(
        name="identical",
        description="Both exactly in the middle on every dimension",
        scores_a=(2.0, 2.0, 2.0, 2.0),
        scores_b=(2.0, 2.0, 2.0, 2.0),
    ),
    GoldenCase(
        name="single_stickiness_gap",
        description="Only stickiness differs, strongly",
        scores_a=(0.5, 2.0, 2.1, 1.9),
        scores_b=(3.5, 2.1, 2.0, 2.0),
    ),
    GoldenCase(
        name="past_future_tie",
        description="Past brooding and future worry tie as the largest gap",
        scores_a=(1.0, 3.0, 3.0, 1.5),
        scores_b=(1.0, 1.0, 1.0, 1.5),
    ),
    GoldenCase(
        name="interpersonal_largest",
        description="Interpersonal has the largest gap, others moderate",
        scores_a=(1.5, 1.6, 0.5, 0.0),
        scores_b=(2.0, 2.0, 2.0, 4.0),
    ),
    GoldenCase(
        name="two_opposite_gaps",
        description="Stickiness and interpersonal differ in opposite directions",
        scores_a=(3.5, 2.0, 2.0, 1.0),
        scores_b=(1.5, 2.0, 2.0, 3.5),
    ),
    GoldenCase(
        name="one_missing_dimension",
        description="Stickiness unknown for A; past brooding dominates",
        scores_a=(None, 0.5, 2.0, 2.0),
        scores_b=(3.0, 3.0, 2.1, 2.0),
    ),
    GoldenCase(
        name="mostly_missing",
        description="Only one dimension scored by both people",
        scores_a=(None, None, 2.0, None),
        scores_b=(1.0, None, 3.5, None),
    ),
)


def get_golden_case(name: str) -> GoldenCase:
    for case in GOLDEN_CASES:
        if case.name == name:
            return case
    raise KeyError(f"Unknown golden case: {name}")
