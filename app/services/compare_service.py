"""
Mind Compare — comparison service.

Entry point used by the API and scripts: takes two raw score maps and two
display names, and returns the finished ``NarrativeBundle``.

Pipeline:
  1. Parse both score maps into known / unknown scores.
  2. Compare every dimension and build the comparison state.
  3. Run the seven section selectors through the fallback resolver.
  4. Render and assemble the bundle.
"""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from app.narrative.aggregator import NarrativeAggregator, NarrativeBundle
from app.narrative.repository import get_template_repository
from app.narrative.scores import parse_score_map
from app.narrative.state import ComparisonState, compare_profiles
from app.narrative.templates import TemplateRepository
from app.narrative.tracing import DefectSink, TraceSink, log_trace

logger = structlog.get_logger(__name__)


class CompareService:
    """Compare two psychometric profiles and produce their narrative."""

    def __init__(
        self,
        repository: TemplateRepository | None = None,
        trace_sink: TraceSink | None = None,
        defect_sink: DefectSink | None = None,
    ) -> None:
        self.repository = repository or get_template_repository()
        self.aggregator = NarrativeAggregator(
            self.repository,
            trace_sink=trace_sink,
            defect_sink=defect_sink,
        )

    @classmethod
    def from_settings(cls, settings) -> CompareService:
        """Build a service wired according to runtime settings."""
        trace_sink = log_trace if settings.NARRATIVE_TRACE_LOGGING else None
        return cls(trace_sink=trace_sink)

    # ── Public API ──────────────────────────────────────────────────

    def build_state(
        self,
        scores_a: Mapping[str, Any] | None,
        scores_b: Mapping[str, Any] | None,
        name_a: str,
        name_b: str,
    ) -> ComparisonState:
        return compare_profiles(parse_score_map(scores_a), parse_score_map(scores_b), name_a, name_b)

    def compare(
        self,
        scores_a: Mapping[str, Any] | None,
        scores_b: Mapping[str, Any] | None,
        name_a: str,
        name_b: str,
    ) -> NarrativeBundle:
        """Main entry point.

        Parameters
        ----------
        scores_a, scores_b : mapping
            ``{dimension: score}``; missing, invalid or out-of-range values
            are treated as unknown.
        name_a, name_b : str
            Display names, already normalised by the caller.
        """
        logger.info("compare.start")
        state = self.build_state(scores_a, scores_b, name_a, name_b)
        bundle = self.aggregator.build(state)
        logger.info(
            "compare.complete",
            dominant=bundle.dominant_dimension.value,
            valid_dimensions=state.valid_count,
            similarity=bundle.similarity_label.value,
            risk=bundle.risk_label.value,
        )
        return bundle
