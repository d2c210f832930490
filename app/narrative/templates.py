"""Narrative template model and repository.

Each template carries a metadata key (scope, section, dimension, relation,
direction, variance) and a text body with ``{{A}}`` / ``{{B}}`` placeholders.
Lookups are metadata-only; ids exist for tracing and tests and are never
used to fetch a template.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, fields
from enum import Enum
from typing import Iterable, Iterator, Optional

import structlog

from app.narrative.comparator import Direction, Relation
from app.narrative.dimensions import ANCHOR_DIMENSION, DIMENSION_ORDER, DimensionKey

logger = structlog.get_logger(__name__)


class Section(str, Enum):
    DOMINANT_DIFFERENCE = "dominant_difference"
    MENTAL_MAP = "mental_map"
    KEY_DIFFERENCES = "key_differences"
    LOOP = "loop"
    FELT_EXPERIENCE = "felt_experience"
    TRIGGERS = "triggers"
    SAFETY = "safety"


class Variance(str, Enum):
    NONE = "none"
    MIXED = "mixed"
    STABLE = "stable"


class Scope(str, Enum):
    """Separates per-dimension templates from the global ones.

    The three global templates are filed under the anchor dimension with the
    same section / relation / direction / variance; scope keeps their keys
    distinct.
    """

    DIMENSION = "dimension"
    GLOBAL_SAFETY = "global_safety"
    GLOBAL_LOW_CONFIDENCE = "global_low_confidence"
    GLOBAL_VERY_LOW_CONFIDENCE = "global_very_low_confidence"


MetadataKey = tuple[
    Scope,
    Section,
    Optional[DimensionKey],
    Optional[Relation],
    Optional[Direction],
    Optional[Variance],
]

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^}]*?)\s*\}\}")
KNOWN_PLACEHOLDERS = frozenset({"A", "B"})


@dataclass(frozen=True)
class Template:
    id: str
    section: Section
    text: str
    dimension: DimensionKey | None = None
    relation: Relation | None = None
    direction: Direction | None = None
    variance: Variance | None = None
    scope: Scope = Scope.DIMENSION

    @property
    def metadata_key(self) -> MetadataKey:
        return (
            self.scope,
            self.section,
            self.dimension,
            self.relation,
            self.direction,
            self.variance,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "section": self.section.value,
            "dimension": self.dimension.value if self.dimension else None,
            "relation": self.relation.value if self.relation else None,
            "direction": self.direction.value if self.direction else None,
            "variance": self.variance.value if self.variance else None,
            "scope": self.scope.value,
            "text": self.text,
        }


@dataclass(frozen=True)
class TemplateQuery:
    """Conjunctive metadata filter.  ``None`` fields match anything.

    ``scope`` defaults to per-dimension templates; global templates are only
    returned when asked for by scope.
    """

    section: Section | None = None
    dimension: DimensionKey | None = None
    relation: Relation | None = None
    direction: Direction | None = None
    variance: Variance | None = None
    scope: Scope | None = Scope.DIMENSION

    @property
    def is_fully_specified(self) -> bool:
        return all(getattr(self, f.name) is not None for f in fields(self))

    @property
    def metadata_key(self) -> MetadataKey:
        return (
            self.scope,
            self.section,
            self.dimension,
            self.relation,
            self.direction,
            self.variance,
        )

    def matches(self, template: Template) -> bool:
        for f in fields(self):
            wanted = getattr(self, f.name)
            if wanted is not None and getattr(template, f.name) != wanted:
                return False
        return True

    def to_dict(self) -> dict:
        return {
            f.name: (getattr(self, f.name).value if getattr(self, f.name) is not None else None)
            for f in fields(self)
        }


@dataclass(frozen=True)
class CorpusDefect:
    kind: str      # duplicate_metadata | empty_section | missing_fallback | unknown_placeholder
    detail: str
    template_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.detail, "template_ids": list(self.template_ids)}


# ---------------------------------------------------------------------------
# Standard fallback queries
# ---------------------------------------------------------------------------

def standard_safety_query(dimension: DimensionKey) -> TemplateQuery:
    return TemplateQuery(
        section=Section.SAFETY,
        dimension=dimension,
        relation=Relation.SIMILAR,
        direction=Direction.NONE,
        variance=Variance.NONE,
    )


def low_confidence_safety_query(dimension: DimensionKey) -> TemplateQuery:
    return TemplateQuery(
        section=Section.SAFETY,
        dimension=dimension,
        relation=Relation.SIMILAR,
        direction=Direction.NONE,
        variance=Variance.MIXED,
    )


def global_query(scope: Scope) -> TemplateQuery:
    variance = Variance.NONE if scope is Scope.GLOBAL_SAFETY else Variance.MIXED
    return TemplateQuery(
        section=Section.SAFETY,
        dimension=ANCHOR_DIMENSION,
        relation=Relation.SIMILAR,
        direction=Direction.NONE,
        variance=variance,
        scope=scope,
    )


class TemplateRepository:
    """Immutable, indexed collection of narrative templates."""

    def __init__(self, templates: Iterable[Template]) -> None:
        self._templates: tuple[Template, ...] = tuple(templates)

        seen: set[str] = set()
        for template in self._templates:
            if template.id in seen:
                raise ValueError(f"Duplicate template id: {template.id}")
            seen.add(template.id)

        self._by_key: dict[MetadataKey, list[Template]] = defaultdict(list)
        self._by_section: dict[Section, list[Template]] = defaultdict(list)
        for template in self._templates:
            self._by_key[template.metadata_key].append(template)
            self._by_section[template.section].append(template)

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates)

    # ── Lookup ──────────────────────────────────────────────────────

    def find_by_metadata(self, query: TemplateQuery | None = None, **filters) -> list[Template]:
        """All templates matching *query* (or keyword filters), corpus order."""
        if query is None:
            query = TemplateQuery(**filters)
        elif filters:
            raise TypeError("Pass either a TemplateQuery or keyword filters, not both")

        if query.is_fully_specified:
            return list(self._by_key.get(query.metadata_key, ()))
        return [t for t in self._templates if query.matches(t)]

    def section_templates(self, section: Section) -> list[Template]:
        return list(self._by_section.get(section, ()))

    def first(self) -> Template | None:
        return self._templates[0] if self._templates else None

    # ── Consistency checks ──────────────────────────────────────────

    def audit(self) -> list[CorpusDefect]:
        """Report data-authoring defects in the loaded corpus."""
        defects: list[CorpusDefect] = []

        for key, group in self._by_key.items():
            if len(group) > 1:
                defects.append(CorpusDefect(
                    kind="duplicate_metadata",
                    detail="templates share metadata " + "/".join(
                        k.value if k is not None else "*" for k in key
                    ),
                    template_ids=tuple(t.id for t in group),
                ))

        for section in Section:
            if not self._by_section.get(section):
                defects.append(CorpusDefect(
                    kind="empty_section",
                    detail=f"no templates for section {section.value}",
                ))

        required: list[TemplateQuery] = []
        for dim in DIMENSION_ORDER:
            required.append(standard_safety_query(dim))
            required.append(low_confidence_safety_query(dim))
        for scope in (Scope.GLOBAL_SAFETY, Scope.GLOBAL_LOW_CONFIDENCE, Scope.GLOBAL_VERY_LOW_CONFIDENCE):
            required.append(global_query(scope))

        for query in required:
            if not self.find_by_metadata(query):
                defects.append(CorpusDefect(
                    kind="missing_fallback",
                    detail="no template for "
                    + ", ".join(f"{k}={v}" for k, v in query.to_dict().items()),
                ))

        for template in self._templates:
            names = set(PLACEHOLDER_PATTERN.findall(template.text))
            unknown = names - KNOWN_PLACEHOLDERS
            if unknown:
                defects.append(CorpusDefect(
                    kind="unknown_placeholder",
                    detail=f"unknown placeholders {sorted(unknown)}",
                    template_ids=(template.id,),
                ))

        if defects:
            logger.warning("templates.audit_defects", count=len(defects))
        return defects
