"""Tri-state score values.

A person's score on a dimension is either a known number inside the quiz
range or explicitly unknown.  Raw inputs arrive from HTTP payloads and stored
results, so anything missing, non-numeric, non-finite or out of range is
parsed into ``Unknown`` with a reason instead of a numeric sentinel.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

import structlog

from app.narrative.dimensions import SCORE_MAX, SCORE_MIN, DimensionKey

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Known:
    value: float

    @property
    def is_known(self) -> bool:
        return True


@dataclass(frozen=True)
class Unknown:
    reason: str = "missing"   # missing | invalid | out_of_range

    @property
    def is_known(self) -> bool:
        return False


Score = Known | Unknown

UNKNOWN = Unknown()


def parse_score(raw: Any) -> Score:
    """Parse one raw score value.

    Accepts ints, floats and numeric strings.  Booleans are rejected even
    though they are ``int`` subclasses.
    """
    if raw is None:
        return Unknown("missing")
    if isinstance(raw, (Known, Unknown)):
        return raw
    if isinstance(raw, bool):
        return Unknown("invalid")

    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return Unknown("missing")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return Unknown("invalid")

    if not math.isfinite(value):
        return Unknown("invalid")
    if value < SCORE_MIN or value > SCORE_MAX:
        return Unknown("out_of_range")
    return Known(value)


def parse_score_map(raw: Mapping[str, Any] | None) -> dict[DimensionKey, Score]:
    """Parse a ``{dimension: score}`` mapping into one score per dimension.

    Dimensions absent from *raw* are ``Unknown("missing")``.  Keys that are
    not dimensions are ignored with a warning.
    """
    raw = raw or {}
    known_keys = {d.value for d in DimensionKey}

    extra = sorted(str(k) for k in raw if str(k) not in known_keys)
    if extra:
        logger.warning("scores.unrecognised_keys", keys=extra)

    return {dim: parse_score(raw.get(dim.value)) for dim in DimensionKey}
