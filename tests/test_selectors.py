"""Unit tests for the seven per-section selectors."""
import pytest
from conftest import make_state

from app.narrative.dimensions import DIMENSION_ORDER, DimensionKey
from app.narrative.resolver import ResolutionTier
from app.narrative.selectors import SectionSelector
from app.narrative.templates import Section
from app.narrative.tracing import CollectingSink


@pytest.fixture
def selector(resolver, trace_sink):
    return SectionSelector(resolver, trace_sink=trace_sink)


class TestDominantDifference:
    """One template per dominant dimension, relation ignored."""

    def test_follows_dominant_dimension(self, selector):
        """The template follows the dominant dimension."""
        state = make_state((1.5, 1.6, 0.5, 0.0), (2.0, 2.0, 2.0, 4.0))
        assert selector.dominant_difference(state).template_id == "A04_interpersonal"

    def test_same_template_when_similar(self, selector, identical_state):
        """Similar profiles still get the dominant dimension's template."""
        assert selector.dominant_difference(identical_state).template_id == "A01_stickiness"


class TestMentalMap:
    """One entry per dimension, keyed by that dimension's relation."""

    def test_all_dimensions_in_order(self, selector, all_very_different_state):
        """One selection per dimension, in dimension order."""
        selections = selector.mental_map(all_very_different_state)
        assert list(selections) == list(DIMENSION_ORDER)
        assert [s.template_id for s in selections.values()] == [
            "B03_stickiness_very_different",
            "B06_past_brooding_very_different",
            "B09_future_worry_very_different",
            "B12_interpersonal_very_different",
        ]

    def test_unknown_dimension_maps_as_similar(self, selector, one_unknown_state):
        """An unknown dimension uses its similar entry."""
        selections = selector.mental_map(one_unknown_state)
        assert selections[DimensionKey.STICKINESS].template_id == "B01_stickiness_similar"
        assert selections[DimensionKey.PAST_BROODING].template_id == "B06_past_brooding_very_different"


class TestKeyDifferences:
    """Very different has no paragraph; direction or mixed variance otherwise."""

    def test_very_different_returns_none(self, selector, all_very_different_state, trace_sink):
        """A very-different dominant dimension yields no paragraph but is traced."""
        assert selector.key_differences(all_very_different_state) is None
        trace = trace_sink.items[-1]
        assert trace.section == "key_differences"
        assert trace.template_id is None

    def test_directional(self, selector):
        """A directional gap selects the A-higher paragraph."""
        state = make_state((3.0, 2.0, 2.0, 2.0), (2.0, 2.0, 2.0, 2.0))
        assert selector.key_differences(state).template_id == "C01_stickiness_A_higher"

    def test_b_higher(self, selector):
        """B higher selects the B-higher template."""
        state = make_state((2.0, 2.0, 1.0, 2.0), (2.0, 2.0, 2.2, 2.0))
        assert selector.key_differences(state).template_id == "C08_future_worry_B_higher"

    def test_similar_dominant_falls_back(self, selector, identical_state):
        """A similar dominant dimension falls back to its safety text."""
        selection = selector.key_differences(identical_state)
        assert selection.tier == ResolutionTier.DIMENSION_SAFETY
        assert selection.template_id == "F05_stickiness_safety"


class TestLoop:
    """Loop content exists for different and very different only."""

    def test_very_different(self, selector, all_very_different_state):
        """Very different selects the very-different loop."""
        assert selector.loop(all_very_different_state).template_id == "D02_stickiness_very_different"

    def test_different(self, selector):
        """Different selects the different loop."""
        state = make_state((2.0, 3.0, 2.0, 2.0), (2.0, 2.0, 2.0, 2.0))
        assert selector.loop(state).template_id == "D03_past_brooding_different"

    def test_similar_falls_back_to_safety(self, selector, identical_state):
        """No loop exists for similar dimensions."""
        selection = selector.loop(identical_state)
        assert selection.tier == ResolutionTier.DIMENSION_SAFETY
        assert selection.template.section == Section.SAFETY


class TestFeltExperience:
    """Direction picks the template; no direction means the safety text."""

    def test_b_higher(self, selector, all_very_different_state):
        """B higher selects the B-higher template."""
        assert selector.felt_experience(all_very_different_state).template_id == "E02_stickiness_B_higher"

    def test_a_higher(self, selector):
        """A higher selects the A-higher template."""
        state = make_state((2.0, 2.0, 2.0, 3.9), (2.0, 2.0, 2.0, 0.1))
        assert selector.felt_experience(state).template_id == "E07_interpersonal_A_higher"

    def test_no_direction_uses_standard_safety(self, selector, identical_state):
        """No direction queries the standard safety text directly."""
        selection = selector.felt_experience(identical_state)
        assert selection.tier == ResolutionTier.EXACT
        assert selection.template_id == "F05_stickiness_safety"
        assert selection.section == Section.FELT_EXPERIENCE


class TestTriggers:
    """Triggers depend on the dominant dimension only."""

    def test_always_resolves(self, selector, identical_state, all_very_different_state):
        """Triggers resolve exactly for every dominant dimension."""
        assert selector.triggers(identical_state).template_id == "F01_stickiness_triggers"
        assert selector.triggers(all_very_different_state).tier == ResolutionTier.EXACT


class TestSafety:
    """Three mutually exclusive confidence regimes."""

    def test_standard(self, selector, all_very_different_state):
        """Full confidence gets the per-dimension safety text."""
        assert selector.safety(all_very_different_state).template_id == "F05_stickiness_safety"

    def test_low_confidence(self, selector, one_unknown_state):
        """Low confidence gets the per-dimension low-confidence text."""
        assert selector.safety(one_unknown_state).template_id == "H02_past_brooding_low_confidence"

    def test_very_low_confidence(self, selector, very_low_confidence_state):
        """Very low confidence gets the global very-low text."""
        assert selector.safety(very_low_confidence_state).template_id == "H06_global_very_low_confidence"

    def test_never_global_safety(self, selector):
        """No confidence regime reaches the global safety defect tier."""
        states = [
            make_state((0.5,) * 4, (3.5,) * 4),
            make_state((None, 1.0, 1.0, 1.0), (1.0, 1.0, 1.0, 1.0)),
            make_state((None,) * 4, (None,) * 4),
        ]
        for state in states:
            assert selector.safety(state).template_id != "A99_global_safety"


class TestTracing:
    """Every selection is traced with section, inputs and tier."""

    def test_trace_per_selection(self, resolver, all_very_different_state):
        """Each selection emits one trace with its inputs and tier."""
        sink = CollectingSink()
        selector = SectionSelector(resolver, trace_sink=sink)
        selector.loop(all_very_different_state)
        selector.safety(all_very_different_state)
        assert [t.section for t in sink] == ["loop", "safety"]
        assert sink.items[0].inputs["relation"] == "very_different"
        assert sink.items[1].inputs["regime"] == "standard"
        assert sink.items[1].tier == "exact"

    def test_empty_sink_receives_first_trace(self, resolver, identical_state):
        """An injected sink is used even while it is still empty."""
        sink = CollectingSink()
        SectionSelector(resolver, trace_sink=sink).triggers(identical_state)
        assert len(sink) == 1
        assert sink.items[0].template_id == "F01_stickiness_triggers"
