"""Display-name normalisation for presentation surfaces.

Only affects what is shown in narratives and exports; stored names are
never modified.
"""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_REPEATED_CHAR = re.compile(r"(.)\1{2,}")

ELLIPSIS = "…"


def normalize_display_name(name: str | None, max_length: int = 32, default: str = "") -> str:
    """Trim, collapse whitespace, cap repeated characters at two, clamp length.

    >>> normalize_display_name("  Saaaaraaa   Smith ")
    'Saaraa Smith'
    """
    normalized = _WHITESPACE.sub(" ", (name or "").strip())
    normalized = _REPEATED_CHAR.sub(r"\1\1", normalized)

    if not normalized:
        return default
    if len(normalized) > max_length:
        normalized = normalized[: max_length - 1] + ELLIPSIS
    return normalized
