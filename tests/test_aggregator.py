"""Integration tests for narrative assembly, including the reference scenarios."""
import dataclasses

import pytest
from conftest import make_state

from app.narrative.corpus_en import DEFAULT_TEMPLATES
from app.narrative.resolver import ResolutionTier
from app.narrative.templates import TemplateRepository
from app.narrative.tracing import CollectingSink

from app.narrative.aggregator import (
    HEADLINE_SINGLE,
    HEADLINE_TIED,
    LOOP_TITLE_ALIGNED,
    LOOP_TITLE_DIFFERENT,
    NarrativeAggregator,
    split_bullets,
    split_steps,
)
from app.narrative.dimensions import DIMENSION_ORDER, DimensionKey, Level
from app.narrative.golden_cases import GOLDEN_CASES
from app.narrative.insights import RiskLevel, SimilarityLevel
from app.narrative.resolver import DEFECT_TIERS
from app.narrative.state import compare_profiles


class TestScenarioAllVeryDifferent:
    """A all 0.5, B all 3.5."""

    @pytest.fixture
    def bundle(self, aggregator, all_very_different_state):
        return aggregator.build(all_very_different_state)

    def test_dominant_and_tie(self, bundle):
        """A four-way tie resolves to stickiness and is flagged as tied."""
        assert bundle.dominant_dimension == DimensionKey.STICKINESS
        assert bundle.dominant_tied is True
        assert bundle.headline.startswith("One of the biggest differences")

    def test_labels(self, bundle):
        """Four very-different dimensions give low similarity and high risk."""
        assert bundle.similarity_label == SimilarityLevel.LOW
        assert bundle.risk_label == RiskLevel.HIGH
        assert bundle.risk_count_very_different == 4
        assert "most key patterns" in bundle.risk_phrase
        assert "most key patterns" in bundle.similarity_complement

    def test_no_key_differences(self, bundle):
        """A very-different dominant dimension has no key-differences paragraph."""
        assert bundle.key_differences is None
        assert bundle.key_differences_text is None

    def test_sections(self, bundle):
        """Each section resolves to its stickiness template."""
        ids = bundle.template_ids()
        assert ids["loop"] == "D02_stickiness_very_different"
        assert ids["felt_experience"] == "E02_stickiness_B_higher"
        assert ids["safety"] == "F05_stickiness_safety"
        assert ids["triggers"] == "F01_stickiness_triggers"

    def test_lists(self, bundle):
        """Every dimension lands in the differences list."""
        assert bundle.similarities == ()
        assert bundle.differences == DIMENSION_ORDER

    def test_loop_steps_and_title(self, bundle):
        """The loop is split into one step per line under the different title."""
        assert bundle.loop.title == LOOP_TITLE_DIFFERENT
        assert len(bundle.loop.steps) == 5
        assert "\n" not in "".join(bundle.loop.steps)

    def test_felt_experience_has_names(self, bundle):
        """Bare subject tokens become display names."""
        assert bundle.felt_experience.text.startswith("Omid may feel")
        assert "Sara may feel" in bundle.felt_experience.text


class TestScenarioIdentical:
    """Identical mid-range profiles."""

    @pytest.fixture
    def bundle(self, aggregator, identical_state):
        return aggregator.build(identical_state)

    def test_labels(self, bundle):
        """Identical profiles give high similarity and low risk."""
        assert bundle.similarity_label == SimilarityLevel.HIGH
        assert bundle.risk_label == RiskLevel.LOW
        assert "close to each other" in bundle.similarity_complement

    def test_all_dimensions_similar(self, bundle):
        """Every dimension lands in the similarities list."""
        assert bundle.similarities == DIMENSION_ORDER
        assert bundle.differences == ()

    def test_loop_falls_back_with_aligned_title(self, bundle):
        """No loop exists for a similar dimension, so the safety text is used."""
        assert bundle.loop.title == LOOP_TITLE_ALIGNED
        assert bundle.loop.template_id == "F05_stickiness_safety"

    def test_felt_experience_is_safety(self, bundle):
        """Without a direction the felt section uses the safety template."""
        assert bundle.felt_experience.template_id == "F05_stickiness_safety"

    def test_mental_map_levels(self, bundle):
        """Scores of 2.0 are medium for both people."""
        assert all(e.a_level == Level.MEDIUM and e.b_level == Level.MEDIUM for e in bundle.mental_map)


class TestScenarioLowConfidence:
    """Stickiness unknown for A."""

    @pytest.fixture
    def bundle(self, aggregator, one_unknown_state):
        return aggregator.build(one_unknown_state)

    def test_confidence_flags(self, bundle):
        """Three valid dimensions are low but not very low confidence."""
        assert bundle.low_confidence is True
        assert bundle.very_low_confidence is False

    def test_safety_is_dimension_low_confidence(self, bundle):
        """Low confidence selects the dominant dimension's low-confidence text."""
        assert bundle.safety.template_id == "H02_past_brooding_low_confidence"

    def test_unknown_dimension_in_mental_map(self, bundle):
        """The unknown dimension keeps its known level and no level for A."""
        entry = bundle.mental_map[0]
        assert entry.dimension == DimensionKey.STICKINESS
        assert entry.is_unknown is True
        assert entry.a_level is None
        assert entry.b_level == Level.HIGH

    def test_dominant_is_past_brooding(self, bundle):
        """The largest valid gap wins and gets the single headline."""
        assert bundle.dominant_dimension == DimensionKey.PAST_BROODING
        assert bundle.headline == HEADLINE_SINGLE.format(label="how the past is handled")


class TestHeadline:
    """Headline wording for tied dominant dimensions."""

    def test_tied_headline(self, aggregator):
        """Past and future tie; past wins on priority with the tied headline."""
        bundle = aggregator.build(make_state((1.0, 3.0, 3.0, 1.5), (1.0, 1.0, 1.0, 1.5)))
        assert bundle.headline == HEADLINE_TIED.format(label="how the past is handled")


class TestBundleContract:
    """Determinism, immutability and self-consistency."""

    def test_deterministic(self, repository):
        """Two builds of the same input produce identical bundles."""
        a = (1.5, 1.6, 0.5, 0.0)
        b = (2.0, 2.0, 2.0, 4.0)
        first = NarrativeAggregator(repository).build(make_state(a, b))
        second = NarrativeAggregator(repository).build(make_state(a, b))
        assert first.to_dict() == second.to_dict()
        assert first.template_ids() == second.template_ids()

    def test_frozen(self, aggregator, identical_state):
        """Bundles cannot be mutated after build."""
        bundle = aggregator.build(identical_state)
        with pytest.raises(dataclasses.FrozenInstanceError):
            bundle.headline = "changed"

    def test_traces_cover_every_section(self, aggregator, all_very_different_state, trace_sink):
        """Every selector decision is traced and forwarded to the injected sink."""
        bundle = aggregator.build(all_very_different_state)
        sections = [t.section for t in bundle.traces]
        assert sections.count("mental_map") == 4
        assert set(sections) == {
            "dominant_difference", "mental_map", "key_differences",
            "loop", "felt_experience", "triggers", "safety",
        }
        assert list(trace_sink) == list(bundle.traces)

    def test_labels_match_state(self, aggregator, one_unknown_state):
        """Bundle labels agree with the state they were built from."""
        bundle = aggregator.build(one_unknown_state)
        assert bundle.similarity_label == one_unknown_state.similarity_label
        assert bundle.risk_label == one_unknown_state.risk_label

    def test_to_dict_shape(self, aggregator, identical_state):
        """Serialised bundle carries names, the mental map and template ids."""
        data = aggregator.build(identical_state).to_dict()
        assert data["names"] == {"a": "Sara", "b": "Omid"}
        assert len(data["mental_map"]) == 4
        assert data["template_ids"]["safety"] == "F05_stickiness_safety"


class TestGoldenCases:
    """Every reference case resolves cleanly."""

    @pytest.mark.parametrize("case", GOLDEN_CASES, ids=lambda c: c.name)
    def test_no_defects_and_no_placeholders(self, aggregator, defect_sink, case):
        """No fallback defects and no unrendered placeholders."""
        state = compare_profiles(case.score_map_a(), case.score_map_b(), "Sara", "Omid")
        bundle = aggregator.build(state)
        assert len(defect_sink) == 0
        assert all(t.tier not in {tier.value for tier in DEFECT_TIERS} for t in bundle.traces)
        assert "{{" not in str(bundle.to_dict())


class TestTextHelpers:
    """Line splitting for loop steps and trigger bullets."""

    def test_split_steps_drops_blank_lines(self):
        """Blank lines are dropped and steps are trimmed."""
        assert split_steps("one\n\n two \n") == ("one", "two")

    def test_split_bullets(self):
        """Bullet markers are stripped."""
        assert split_bullets("• first\n- second\nthird\n\n") == ("first", "second", "third")


class TestSafetyFallbackRendering:
    """A safety template reused by another section renders as safety text."""

    @pytest.fixture
    def repository_with_article(self):
        templates = [
            dataclasses.replace(t, text="A short pause helps {{A}} and {{B}}.")
            if t.id == "F05_stickiness_safety" else t
            for t in DEFAULT_TEMPLATES
        ]
        return TemplateRepository(templates)

    def test_felt_fallback_keeps_leading_article(self, repository_with_article, identical_state):
        """A leading article "A" is not treated as a subject token."""
        bundle = NarrativeAggregator(repository_with_article).build(identical_state)
        assert bundle.felt_experience.template_id == "F05_stickiness_safety"
        assert bundle.felt_experience.text == "A short pause helps Sara and Omid."

    def test_same_template_renders_identically(self, repository_with_article, identical_state):
        """The felt and safety sections agree when they share a template."""
        bundle = NarrativeAggregator(repository_with_article).build(identical_state)
        assert bundle.felt_experience.template_id == bundle.safety.template_id
        assert bundle.felt_experience.text == bundle.safety.text


class TestDefectReporting:
    """Defects reach a freshly injected, still empty sink."""

    def test_missing_dimension_safety_is_reported(self, identical_state):
        """Without F05 the loop falls back to global safety and a defect is recorded."""
        repository = TemplateRepository(
            [t for t in DEFAULT_TEMPLATES if t.id != "F05_stickiness_safety"]
        )
        sink = CollectingSink()
        bundle = NarrativeAggregator(repository, defect_sink=sink).build(identical_state)
        assert bundle.loop.template_id == "A99_global_safety"
        assert ResolutionTier.GLOBAL_SAFETY.value in [t.tier for t in bundle.traces]
        assert len(sink) > 0
        assert {d.kind for d in sink} == {"fallback_global_safety"}
