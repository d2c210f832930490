"""Unit tests for the comparison state builder: dominance, ties, confidence."""
from types import MappingProxyType

import pytest
from conftest import make_state

from app.narrative.comparator import DimensionComparison, Direction, Relation, compare_dimension
from app.narrative.dimensions import DIMENSION_ORDER, DOMINANT_PRIORITY, DimensionKey
from app.narrative.insights import RiskLevel, SimilarityLevel, aggregate_insights
from app.narrative.scores import Known
from app.narrative.state import build_comparison_state, select_dominant_dimension

S = DimensionKey.STICKINESS
P = DimensionKey.PAST_BROODING
F = DimensionKey.FUTURE_WORRY
IP = DimensionKey.INTERPERSONAL


def _forced(dim, delta, relation):
    """Comparison with a hand-picked delta / relation pair."""
    return DimensionComparison(
        dimension=dim,
        a_score=Known(0.0),
        b_score=Known(delta),
        delta=delta,
        relation=relation,
        direction=Direction.B_HIGHER,
        a_level=None,
        b_level=None,
        valid=True,
    )


class TestDominantSelection:
    """Max delta, epsilon tie window, very-different preference, priority order."""

    def test_single_largest_delta_wins(self):
        """The largest delta is dominant and not tied."""
        state = make_state((1.5, 1.6, 0.5, 0.0), (2.0, 2.0, 2.0, 4.0))
        assert state.dominant_dimension == IP
        assert state.dominant_tied is False

    def test_tie_broken_by_priority(self):
        """Equal deltas are broken by priority order."""
        state = make_state((1.0, 3.0, 3.0, 1.5), (1.0, 1.0, 1.0, 1.5))
        assert state.dominant_dimension == P
        assert state.dominant_tied is True

    def test_all_equal_deltas_pick_first_priority(self, all_very_different_state):
        """A four-way tie picks the first priority dimension."""
        assert all_very_different_state.dominant_dimension == DOMINANT_PRIORITY[0]
        assert all_very_different_state.dominant_tied is True

    def test_very_different_preferred_within_tie_window(self):
        """Very-different candidates win within the epsilon window."""
        comparisons = {
            S: _forced(S, 1.605, Relation.DIFFERENT),
            P: _forced(P, 1.605, Relation.DIFFERENT),
            F: _forced(F, 1.605, Relation.DIFFERENT),
            IP: _forced(IP, 1.6, Relation.VERY_DIFFERENT),
        }
        dominant, tied = select_dominant_dimension(comparisons)
        assert dominant == IP
        assert tied is True

    def test_tied_reflects_candidates_before_narrowing(self):
        """Tied counts candidates before very-different narrowing."""
        comparisons = {
            S: _forced(S, 1.0, Relation.DIFFERENT),
            P: _forced(P, 1.6, Relation.VERY_DIFFERENT),
            F: _forced(F, 1.595, Relation.DIFFERENT),
            IP: _forced(IP, 0.0, Relation.SIMILAR),
        }
        dominant, tied = select_dominant_dimension(comparisons)
        assert dominant == P
        assert tied is True

    def test_outside_epsilon_is_not_a_tie(self):
        """Deltas 0.1 apart are not tied."""
        state = make_state((0.5, 2.0, 2.0, 2.0), (3.5, 2.0, 2.0, 0.6))
        assert state.dominant_dimension == S
        assert state.dominant_tied is False

    def test_unknown_dimensions_are_ignored(self, one_unknown_state):
        """Unknown dimensions never become dominant."""
        assert one_unknown_state.dominant_dimension == P
        assert one_unknown_state.dominant_tied is False

    def test_no_valid_dimensions(self):
        """No valid dimension falls back to the first priority, untied."""
        state = make_state((None, None, None, None), (1.0, 2.0, 3.0, 4.0))
        assert state.dominant_dimension == DOMINANT_PRIORITY[0]
        assert state.dominant_tied is False

    def test_identical_profiles_tie_on_zero(self, identical_state):
        """Identical profiles tie on a zero delta."""
        assert identical_state.dominant_dimension == S
        assert identical_state.dominant_tied is True


class TestConfidence:
    """Low confidence below 4 valid dimensions, very low below 2."""

    @pytest.mark.parametrize(
        "a_values,low,very_low",
        [
            ((1.0, 1.0, 1.0, 1.0), False, False),
            ((None, 1.0, 1.0, 1.0), True, False),
            ((None, None, 1.0, 1.0), True, False),
            ((None, None, None, 1.0), True, True),
            ((None, None, None, None), True, True),
        ],
    )
    def test_confidence_boundaries(self, a_values, low, very_low):
        """Low below four valid dimensions, very low below two."""
        state = make_state(a_values, (2.0, 2.0, 2.0, 2.0))
        assert state.low_confidence is low
        assert state.very_low_confidence is very_low

    def test_valid_count(self, one_unknown_state):
        """Unknown dimensions are excluded from the valid count."""
        assert one_unknown_state.valid_count == 3


LABEL_CASES = [
    ((0.5, 0.5, 0.5, 0.5), (3.5, 3.5, 3.5, 3.5)),
    ((2.0, 2.0, 2.0, 2.0), (2.0, 2.0, 2.0, 2.0)),
    ((1.5, 1.6, 0.5, 0.0), (2.0, 2.0, 2.0, 4.0)),
    ((3.5, 2.0, 2.0, 1.0), (1.5, 2.0, 2.0, 3.5)),
    ((None, 0.5, 2.0, 2.0), (3.0, 3.0, 2.1, 2.0)),
]


class TestStateLabels:
    """State labels agree with the insight aggregator for every fixture."""

    @pytest.mark.parametrize("a_values,b_values", LABEL_CASES)
    def test_labels_match_insights(self, a_values, b_values):
        """Similarity, risk and very-different count come from one source."""
        state = make_state(a_values, b_values)
        insights = aggregate_insights(state)
        assert state.similarity_label == insights.similarity_label
        assert state.risk_label == insights.risk_label
        assert state.risk_count_very_different == insights.risk_count_very_different

    @pytest.mark.parametrize("a_values,b_values", LABEL_CASES)
    def test_very_different_dimensions_match_insights(self, a_values, b_values):
        """A dimension is very different in the state iff insights list it as such."""
        state = make_state(a_values, b_values)
        insights = aggregate_insights(state)
        very_different = {
            dim for dim, comparison in state.dimensions.items()
            if comparison.relation is Relation.VERY_DIFFERENT
        }
        assert very_different == set(insights.very_different_dimensions)

    def test_all_very_different_labels(self, all_very_different_state):
        """Four very-different dimensions give low similarity and high risk."""
        assert all_very_different_state.similarity_label == SimilarityLevel.LOW
        assert all_very_different_state.risk_label == RiskLevel.HIGH
        assert all_very_different_state.risk_count_very_different == 4

    def test_identical_labels(self, identical_state):
        """Identical profiles give high similarity and low risk."""
        assert identical_state.similarity_label == SimilarityLevel.HIGH
        assert identical_state.risk_label == RiskLevel.LOW


class TestStateShape:
    """State is complete and read-only."""

    def test_missing_comparisons_filled_as_unknown(self):
        """Missing dimensions are filled with unknown comparisons."""
        state = build_comparison_state({S: compare_dimension(S, 1.0, 3.0)}, "A", "B")
        assert set(state.dimensions) == set(DIMENSION_ORDER)
        assert state.dimension(P).valid is False
        assert state.dominant_dimension == S

    def test_dimensions_mapping_is_read_only(self, identical_state):
        """The dimensions mapping cannot be modified."""
        assert isinstance(identical_state.dimensions, MappingProxyType)
        with pytest.raises(TypeError):
            identical_state.dimensions[S] = None

    def test_state_is_frozen(self, identical_state):
        """State attributes cannot be reassigned."""
        with pytest.raises(AttributeError):
            identical_state.dominant_dimension = P

    def test_to_dict_lists_dimensions_in_order(self, identical_state):
        """Serialised dimensions follow dimension order."""
        data = identical_state.to_dict()
        assert [d["dimension"] for d in data["dimensions"]] == [d.value for d in DIMENSION_ORDER]
