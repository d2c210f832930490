"""Placeholder substitution for template texts."""

from __future__ import annotations

import re

from app.narrative.templates import Section

_PLACEHOLDERS = re.compile(r"\{\{(?P<placeholder>[AB])\}\}")

# Placeholders, plus the bare subject tokens "A" / "B" when they stand alone
# at the start of a line or after whitespace and are followed by whitespace,
# punctuation or the end of the text.
_PLACEHOLDERS_AND_SUBJECTS = re.compile(
    r"\{\{(?P<placeholder>[AB])\}\}"
    r"|(?<!\S)(?P<bare>[AB])(?=[\s.,;:!?،]|$)"
)

# Sections whose texts use bare subject tokens
BARE_SUBJECT_SECTIONS = frozenset({Section.FELT_EXPERIENCE})


def render_template(text: str, name_a: str, name_b: str, section: Section | None = None) -> str:
    """Substitute the two display names into *text*.

    Done in a single regex pass, so a name that itself contains "A", "B" or
    braces is never substituted a second time.
    """
    names = {"A": name_a, "B": name_b}
    pattern = _PLACEHOLDERS_AND_SUBJECTS if section in BARE_SUBJECT_SECTIONS else _PLACEHOLDERS

    def _replace(match: re.Match) -> str:
        return names[match.group("placeholder") or match.group("bare")]

    return pattern.sub(_replace, text)
