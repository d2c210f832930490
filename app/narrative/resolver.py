"""Fallback resolution: desired metadata -> exactly one template.

Tiers, tried in order:

1. exact metadata match;
2. low (but not very low) confidence: the requested dimension's
   low-confidence safety template;
3. very low confidence: the global very-low-confidence template, else the
   global low-confidence template;
4. the requested dimension's standard safety template;
5. the global safety template;
6. the first template of the requested section, else of the repository.

Tiers 5 and 6 are never reached with a complete corpus; reaching them, or
finding more than one exact match, is reported as a template defect.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from app.narrative.state import ComparisonState
from app.narrative.templates import (
    Scope,
    Template,
    TemplateQuery,
    TemplateRepository,
    global_query,
    low_confidence_safety_query,
    standard_safety_query,
)
from app.narrative.tracing import DefectSink, TemplateDefect, discard_defect

logger = structlog.get_logger(__name__)


class ResolutionTier(str, Enum):
    EXACT = "exact"
    LOW_CONFIDENCE_DIMENSION = "low_confidence_dimension"
    VERY_LOW_CONFIDENCE_GLOBAL = "very_low_confidence_global"
    DIMENSION_SAFETY = "dimension_safety"
    GLOBAL_SAFETY = "global_safety"
    LAST_RESORT = "last_resort"


# Tiers that only trigger when the corpus is incomplete
DEFECT_TIERS = frozenset({ResolutionTier.GLOBAL_SAFETY, ResolutionTier.LAST_RESORT})


@dataclass(frozen=True)
class Resolution:
    template: Template
    tier: ResolutionTier


class FallbackResolver:
    """Resolve a ``TemplateQuery`` against a repository; never returns nothing."""

    def __init__(
        self,
        repository: TemplateRepository,
        defect_sink: DefectSink | None = None,
    ) -> None:
        if not len(repository):
            raise ValueError("Template repository is empty")
        self.repository = repository
        self._defect_sink = defect_sink if defect_sink is not None else discard_defect

    # ── Public API ──────────────────────────────────────────────────

    def resolve(self, query: TemplateQuery, state: ComparisonState) -> Template:
        return self.resolve_with_tier(query, state).template

    def resolve_with_tier(self, query: TemplateQuery, state: ComparisonState) -> Resolution:
        # 1. Exact
        matches = self.repository.find_by_metadata(query)
        if matches:
            if len(matches) > 1:
                self._report(
                    "duplicate_metadata", query, tuple(t.id for t in matches), level="warning"
                )
            return Resolution(matches[0], ResolutionTier.EXACT)

        # 2. Low confidence, per dimension
        if state.low_confidence and not state.very_low_confidence and query.dimension is not None:
            found = self._first(low_confidence_safety_query(query.dimension))
            if found is not None:
                return Resolution(found, ResolutionTier.LOW_CONFIDENCE_DIMENSION)

        # 3. Very low confidence, global
        if state.very_low_confidence:
            found = self._first(global_query(Scope.GLOBAL_VERY_LOW_CONFIDENCE)) or self._first(
                global_query(Scope.GLOBAL_LOW_CONFIDENCE)
            )
            if found is not None:
                return Resolution(found, ResolutionTier.VERY_LOW_CONFIDENCE_GLOBAL)

        # 4. Standard per-dimension safety
        if query.dimension is not None:
            found = self._first(standard_safety_query(query.dimension))
            if found is not None:
                return Resolution(found, ResolutionTier.DIMENSION_SAFETY)

        # 5. Global safety
        found = self._first(global_query(Scope.GLOBAL_SAFETY))
        if found is not None:
            self._report("fallback_global_safety", query, (found.id,), level="warning")
            return Resolution(found, ResolutionTier.GLOBAL_SAFETY)

        # 6. Last resort
        section_templates = (
            self.repository.section_templates(query.section) if query.section is not None else []
        )
        found = section_templates[0] if section_templates else self.repository.first()
        self._report("fallback_last_resort", query, (found.id,), level="error")
        return Resolution(found, ResolutionTier.LAST_RESORT)

    # ── Helpers ─────────────────────────────────────────────────────

    def _first(self, query: TemplateQuery) -> Template | None:
        matches = self.repository.find_by_metadata(query)
        return matches[0] if matches else None

    def _report(
        self,
        kind: str,
        query: TemplateQuery,
        template_ids: tuple[str, ...],
        level: str,
    ) -> None:
        defect = TemplateDefect(kind=kind, query=query.to_dict(), template_ids=template_ids)
        getattr(logger, level)("narrative.template_defect", **defect.to_dict())
        self._defect_sink(defect)
