"""Per-section template selectors.

Each narrative section has its own decision procedure that turns the
comparison state into a template query; the ``FallbackResolver`` then
guarantees a template.  Every decision is reported to the trace sink.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.narrative.comparator import Direction, Relation
from app.narrative.dimensions import DIMENSION_ORDER, DimensionKey
from app.narrative.resolver import FallbackResolver, ResolutionTier
from app.narrative.state import ComparisonState
from app.narrative.templates import (
    Scope,
    Section,
    Template,
    TemplateQuery,
    Variance,
    global_query,
    low_confidence_safety_query,
    standard_safety_query,
)
from app.narrative.tracing import SelectionTrace, TraceSink, discard_trace


@dataclass(frozen=True)
class Selection:
    section: Section
    dimension: DimensionKey
    template: Template | None
    tier: ResolutionTier | None

    @property
    def template_id(self) -> str | None:
        return self.template.id if self.template else None


class SectionSelector:
    """The seven narrative section selectors, sharing one resolver."""

    def __init__(self, resolver: FallbackResolver, trace_sink: TraceSink | None = None) -> None:
        self.resolver = resolver
        self._trace_sink = trace_sink if trace_sink is not None else discard_trace

    # ── Sections ────────────────────────────────────────────────────

    def dominant_difference(self, state: ComparisonState) -> Selection:
        dim = state.dominant_dimension
        query = TemplateQuery(section=Section.DOMINANT_DIFFERENCE, dimension=dim)
        return self._resolve(Section.DOMINANT_DIFFERENCE, dim, query, state, tied=state.dominant_tied)

    def mental_map(self, state: ComparisonState) -> dict[DimensionKey, Selection]:
        """One selection per dimension, in ``DIMENSION_ORDER``."""
        selections: dict[DimensionKey, Selection] = {}
        for dim in DIMENSION_ORDER:
            comparison = state.dimension(dim)
            query = TemplateQuery(
                section=Section.MENTAL_MAP,
                dimension=dim,
                relation=comparison.relation,
            )
            selections[dim] = self._resolve(
                Section.MENTAL_MAP,
                dim,
                query,
                state,
                relation=comparison.relation.value,
                valid=comparison.valid,
            )
        return selections

    def key_differences(self, state: ComparisonState) -> Selection | None:
        """Explanatory paragraph for the dominant dimension.

        There is no paragraph for a very-different dominant dimension; the
        caller renders the differences list on its own in that case.
        """
        dim = state.dominant_dimension
        comparison = state.dominant

        if comparison.relation is Relation.VERY_DIFFERENT:
            self._trace_sink(SelectionTrace(
                section=Section.KEY_DIFFERENCES.value,
                dimension=dim.value,
                inputs={"relation": comparison.relation.value, "reason": "no_very_different_content"},
            ))
            return None

        if comparison.direction is Direction.NONE:
            query = TemplateQuery(
                section=Section.KEY_DIFFERENCES,
                dimension=dim,
                relation=comparison.relation,
                direction=Direction.NONE,
                variance=Variance.MIXED,
            )
        else:
            query = TemplateQuery(
                section=Section.KEY_DIFFERENCES,
                dimension=dim,
                relation=comparison.relation,
                direction=comparison.direction,
                variance=Variance.NONE,
            )
        return self._resolve(
            Section.KEY_DIFFERENCES,
            dim,
            query,
            state,
            relation=comparison.relation.value,
            direction=comparison.direction.value,
        )

    def loop(self, state: ComparisonState) -> Selection:
        dim = state.dominant_dimension
        relation = state.dominant.relation
        query = TemplateQuery(section=Section.LOOP, dimension=dim, relation=relation)
        return self._resolve(Section.LOOP, dim, query, state, relation=relation.value)

    def felt_experience(self, state: ComparisonState) -> Selection:
        dim = state.dominant_dimension
        direction = state.dominant.direction
        if direction is Direction.NONE:
            query = standard_safety_query(dim)
        else:
            query = TemplateQuery(section=Section.FELT_EXPERIENCE, dimension=dim, direction=direction)
        return self._resolve(Section.FELT_EXPERIENCE, dim, query, state, direction=direction.value)

    def triggers(self, state: ComparisonState) -> Selection:
        dim = state.dominant_dimension
        query = TemplateQuery(section=Section.TRIGGERS, dimension=dim)
        return self._resolve(Section.TRIGGERS, dim, query, state)

    def safety(self, state: ComparisonState) -> Selection:
        """Exactly one safety text, chosen by confidence regime."""
        dim = state.dominant_dimension
        if state.very_low_confidence:
            regime = "very_low_confidence"
            query = global_query(Scope.GLOBAL_VERY_LOW_CONFIDENCE)
        elif state.low_confidence:
            regime = "low_confidence"
            query = low_confidence_safety_query(dim)
        else:
            regime = "standard"
            query = standard_safety_query(dim)
        return self._resolve(Section.SAFETY, dim, query, state, regime=regime)

    # ── Helpers ─────────────────────────────────────────────────────

    def _resolve(
        self,
        section: Section,
        dimension: DimensionKey,
        query: TemplateQuery,
        state: ComparisonState,
        **inputs,
    ) -> Selection:
        resolution = self.resolver.resolve_with_tier(query, state)
        inputs.update(
            low_confidence=state.low_confidence,
            very_low_confidence=state.very_low_confidence,
        )
        self._trace_sink(SelectionTrace(
            section=section.value,
            dimension=dimension.value,
            inputs=inputs,
            template_id=resolution.template.id,
            tier=resolution.tier.value,
        ))
        return Selection(
            section=section,
            dimension=dimension,
            template=resolution.template,
            tier=resolution.tier,
        )
