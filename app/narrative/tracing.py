"""Selection traces and template defects.

Every selector decision produces a ``SelectionTrace``; every data-authoring
problem the resolver runs into produces a ``TemplateDefect``.  Both go to
injectable sinks (plain callables) so tests can collect them and production
can log them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SelectionTrace:
    section: str
    dimension: str | None
    inputs: dict = field(default_factory=dict)   # relation / direction / confidence used
    template_id: str | None = None               # None when the section is left empty
    tier: str | None = None                      # resolution tier, None when not resolved

    def to_dict(self) -> dict:
        return {
            "section": self.section,
            "dimension": self.dimension,
            "inputs": dict(self.inputs),
            "template_id": self.template_id,
            "tier": self.tier,
        }


@dataclass(frozen=True)
class TemplateDefect:
    kind: str        # duplicate_metadata | fallback_global_safety | fallback_last_resort
    query: dict
    template_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"kind": self.kind, "query": self.query, "template_ids": list(self.template_ids)}


TraceSink = Callable[[SelectionTrace], None]
DefectSink = Callable[[TemplateDefect], None]


def log_trace(trace: SelectionTrace) -> None:
    logger.debug("narrative.selection", **trace.to_dict())


def discard_trace(trace: SelectionTrace) -> None:
    return None


def discard_defect(defect: TemplateDefect) -> None:
    return None


class CollectingSink:
    """Sink that keeps everything it receives, in order."""

    def __init__(self) -> None:
        self.items: list = []

    def __call__(self, item) -> None:
        self.items.append(item)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
