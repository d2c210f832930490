"""Narrative aggregation — comparison state -> ``NarrativeBundle``.

The bundle is the single source of truth for every rendering surface (API
JSON, share text).  It is assembled in one pass from the seven selectors,
the renderer and the insight aggregator, and is immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from app.narrative.comparator import Relation
from app.narrative.dimensions import (
    DIMENSION_HEADLINE_LABELS,
    DIMENSION_ORDER,
    DIMENSION_TITLES,
    DimensionKey,
    Level,
)
from app.narrative.insights import (
    AggregatedInsights,
    DifferenceBreadth,
    RiskLevel,
    SimilarityLevel,
    aggregate_insights,
)
from app.narrative.renderer import render_template
from app.narrative.resolver import FallbackResolver
from app.narrative.selectors import SectionSelector, Selection
from app.narrative.state import ComparisonState
from app.narrative.templates import Section, TemplateRepository
from app.narrative.tracing import CollectingSink, DefectSink, SelectionTrace, TraceSink

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Fixed phrasing
# ---------------------------------------------------------------------------
HEADLINE_SINGLE = "The biggest difference between your minds is in {label}."
HEADLINE_TIED = "One of the biggest differences between your minds is in {label}."

LOOP_TITLE_ALIGNED = "When this shared pattern is active, this cycle often forms:"
LOOP_TITLE_DIFFERENT = "When this difference is active, this cycle often forms:"

FELT_TITLE_ALIGNED = "How this shared pattern may feel"
FELT_TITLE_DIFFERENT = "How this difference may feel"

SIMILARITY_COMPLEMENTS: dict[DifferenceBreadth, str] = {
    DifferenceBreadth.MOST: "In most key patterns, your minds react differently.",
    DifferenceBreadth.SEVERAL: "In several key patterns, your minds react differently.",
    DifferenceBreadth.SOME: "Some key patterns show a difference between you.",
    DifferenceBreadth.NONE: "In many situations, your mental reactions are close to each other.",
}

RISK_PHRASES: dict[RiskLevel, str] = {
    RiskLevel.LOW: "Your mental patterns rarely lead to misunderstandings.",
    RiskLevel.MEDIUM: "In some situations, you may misread each other.",
    RiskLevel.HIGH: "In a few key patterns, misunderstandings are more likely.",
}
RISK_PHRASE_HIGH_MOST = "Across most key patterns, misunderstandings are more likely."

SIMILARITY_TITLES: dict[SimilarityLevel, str] = {
    SimilarityLevel.HIGH: "High similarity",
    SimilarityLevel.MEDIUM: "Medium similarity",
    SimilarityLevel.LOW: "Low similarity",
}

BULLET_PREFIXES = ("•", "-", "*")


# ---------------------------------------------------------------------------
# Bundle types
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RenderedSection:
    section: Section
    dimension: DimensionKey
    template_id: str
    text: str

    def to_dict(self) -> dict:
        return {
            "section": self.section.value,
            "dimension": self.dimension.value,
            "template_id": self.template_id,
            "text": self.text,
        }


@dataclass(frozen=True)
class MentalMapEntry:
    dimension: DimensionKey
    title: str
    relation: Relation
    text: str
    template_id: str
    a_level: Level | None
    b_level: Level | None
    is_unknown: bool

    def to_dict(self) -> dict:
        return {
            "dimension": self.dimension.value,
            "title": self.title,
            "relation": self.relation.value,
            "text": self.text,
            "template_id": self.template_id,
            "a_level": self.a_level.value if self.a_level else None,
            "b_level": self.b_level.value if self.b_level else None,
            "is_unknown": self.is_unknown,
        }


@dataclass(frozen=True)
class LoopSection:
    title: str
    text: str
    steps: tuple[str, ...]
    template_id: str

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "text": self.text,
            "steps": list(self.steps),
            "template_id": self.template_id,
        }


@dataclass(frozen=True)
class TriggerSection:
    text: str
    items: tuple[str, ...]
    template_id: str

    def to_dict(self) -> dict:
        return {"text": self.text, "items": list(self.items), "template_id": self.template_id}


@dataclass(frozen=True)
class NarrativeBundle:
    name_a: str
    name_b: str
    dominant_dimension: DimensionKey
    dominant_tied: bool
    headline: str
    similarity_label: SimilarityLevel
    similarity_title: str
    similarity_complement: str
    risk_label: RiskLevel
    risk_phrase: str
    risk_count_very_different: int
    dominant_difference: RenderedSection
    mental_map: tuple[MentalMapEntry, ...]
    key_differences: RenderedSection | None
    loop: LoopSection
    felt_experience: RenderedSection
    felt_experience_title: str
    triggers: TriggerSection
    safety: RenderedSection
    similarities: tuple[DimensionKey, ...]
    differences: tuple[DimensionKey, ...]
    insights: AggregatedInsights
    low_confidence: bool
    very_low_confidence: bool
    traces: tuple[SelectionTrace, ...] = ()

    @property
    def key_differences_text(self) -> str | None:
        return self.key_differences.text if self.key_differences else None

    def template_ids(self) -> dict[str, object]:
        """Selected template id per section (mental map per dimension)."""
        return {
            Section.DOMINANT_DIFFERENCE.value: self.dominant_difference.template_id,
            Section.MENTAL_MAP.value: {e.dimension.value: e.template_id for e in self.mental_map},
            Section.KEY_DIFFERENCES.value: (
                self.key_differences.template_id if self.key_differences else None
            ),
            Section.LOOP.value: self.loop.template_id,
            Section.FELT_EXPERIENCE.value: self.felt_experience.template_id,
            Section.TRIGGERS.value: self.triggers.template_id,
            Section.SAFETY.value: self.safety.template_id,
        }

    def to_dict(self) -> dict:
        return {
            "names": {"a": self.name_a, "b": self.name_b},
            "dominant_dimension": self.dominant_dimension.value,
            "dominant_tied": self.dominant_tied,
            "headline": self.headline,
            "similarity": {
                "label": self.similarity_label.value,
                "title": self.similarity_title,
                "complement": self.similarity_complement,
            },
            "risk": {
                "label": self.risk_label.value,
                "phrase": self.risk_phrase,
                "count_very_different": self.risk_count_very_different,
            },
            "dominant_difference": self.dominant_difference.to_dict(),
            "mental_map": [e.to_dict() for e in self.mental_map],
            "key_differences": self.key_differences.to_dict() if self.key_differences else None,
            "loop": self.loop.to_dict(),
            "felt_experience": self.felt_experience.to_dict(),
            "felt_experience_title": self.felt_experience_title,
            "triggers": self.triggers.to_dict(),
            "safety": self.safety.to_dict(),
            "similarities": [d.value for d in self.similarities],
            "differences": [d.value for d in self.differences],
            "very_different": [d.value for d in self.insights.very_different_dimensions],
            "confidence": {
                "low": self.low_confidence,
                "very_low": self.very_low_confidence,
            },
            "template_ids": self.template_ids(),
            "traces": [t.to_dict() for t in self.traces],
        }


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------
def split_steps(text: str) -> tuple[str, ...]:
    return tuple(line.strip() for line in text.splitlines() if line.strip())


def split_bullets(text: str) -> tuple[str, ...]:
    items = []
    for line in text.splitlines():
        line = line.strip()
        for prefix in BULLET_PREFIXES:
            if line.startswith(prefix):
                line = line[len(prefix):].strip()
                break
        if line:
            items.append(line)
    return tuple(items)


def build_headline(state: ComparisonState) -> str:
    label = DIMENSION_HEADLINE_LABELS[state.dominant_dimension]
    template = HEADLINE_TIED if state.dominant_tied else HEADLINE_SINGLE
    return template.format(label=label)


def build_risk_phrase(insights: AggregatedInsights) -> str:
    if insights.risk_label is RiskLevel.HIGH and insights.breadth is DifferenceBreadth.MOST:
        return RISK_PHRASE_HIGH_MOST
    return RISK_PHRASES[insights.risk_label]


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------
class NarrativeAggregator:
    """Assemble a ``NarrativeBundle`` from a ``ComparisonState``."""

    def __init__(
        self,
        repository: TemplateRepository,
        trace_sink: TraceSink | None = None,
        defect_sink: DefectSink | None = None,
    ) -> None:
        self.resolver = FallbackResolver(repository, defect_sink=defect_sink)
        self._trace_sink = trace_sink

    def build(self, state: ComparisonState) -> NarrativeBundle:
        log = logger.bind(
            dominant=state.dominant_dimension.value,
            low_confidence=state.low_confidence,
            very_low_confidence=state.very_low_confidence,
        )
        log.debug("narrative.build_start")

        collected = CollectingSink()

        def _sink(trace: SelectionTrace) -> None:
            collected(trace)
            if self._trace_sink is not None:
                self._trace_sink(trace)

        selector = SectionSelector(self.resolver, trace_sink=_sink)
        insights = aggregate_insights(state)

        dominant = selector.dominant_difference(state)
        mental_map = selector.mental_map(state)
        key_differences = selector.key_differences(state)
        loop = selector.loop(state)
        felt = selector.felt_experience(state)
        triggers = selector.triggers(state)
        safety = selector.safety(state)

        loop_text = self._render(loop, state)
        triggers_text = self._render(triggers, state)
        aligned = state.dominant.relation is Relation.SIMILAR
        loop_title = LOOP_TITLE_ALIGNED if aligned else LOOP_TITLE_DIFFERENT

        bundle = NarrativeBundle(
            name_a=state.name_a,
            name_b=state.name_b,
            dominant_dimension=state.dominant_dimension,
            dominant_tied=state.dominant_tied,
            headline=build_headline(state),
            similarity_label=insights.similarity_label,
            similarity_title=SIMILARITY_TITLES[insights.similarity_label],
            similarity_complement=SIMILARITY_COMPLEMENTS[insights.breadth],
            risk_label=insights.risk_label,
            risk_phrase=build_risk_phrase(insights),
            risk_count_very_different=insights.risk_count_very_different,
            dominant_difference=self._section(dominant, state),
            mental_map=tuple(
                self._mental_map_entry(mental_map[dim], state) for dim in DIMENSION_ORDER
            ),
            key_differences=self._section(key_differences, state) if key_differences else None,
            loop=LoopSection(
                title=loop_title,
                text=loop_text,
                steps=split_steps(loop_text),
                template_id=loop.template_id,
            ),
            felt_experience=self._section(felt, state),
            felt_experience_title=FELT_TITLE_ALIGNED if aligned else FELT_TITLE_DIFFERENT,
            triggers=TriggerSection(
                text=triggers_text,
                items=split_bullets(triggers_text),
                template_id=triggers.template_id,
            ),
            safety=self._section(safety, state),
            similarities=insights.similarities,
            differences=insights.differences,
            insights=insights,
            low_confidence=state.low_confidence,
            very_low_confidence=state.very_low_confidence,
            traces=tuple(collected),
        )
        log.info(
            "narrative.build_complete",
            tied=state.dominant_tied,
            similarity=bundle.similarity_label.value,
            risk=bundle.risk_label.value,
            has_key_differences=bundle.key_differences is not None,
        )
        return bundle

    # ── Helpers ─────────────────────────────────────────────────────

    @staticmethod
    def _render(selection: Selection, state: ComparisonState) -> str:
        # Bare subject tokens follow the template's own section, not the requesting one.
        return render_template(
            selection.template.text, state.name_a, state.name_b, selection.template.section
        )

    def _section(self, selection: Selection, state: ComparisonState) -> RenderedSection:
        return RenderedSection(
            section=selection.section,
            dimension=selection.dimension,
            template_id=selection.template_id,
            text=self._render(selection, state),
        )

    def _mental_map_entry(self, selection: Selection, state: ComparisonState) -> MentalMapEntry:
        comparison = state.dimension(selection.dimension)
        return MentalMapEntry(
            dimension=selection.dimension,
            title=DIMENSION_TITLES[selection.dimension],
            relation=comparison.relation,
            text=self._render(selection, state),
            template_id=selection.template_id,
            a_level=comparison.a_level,
            b_level=comparison.b_level,
            is_unknown=not comparison.valid,
        )
