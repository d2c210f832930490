"""Plain-text export of a narrative bundle.

Used for "copy / share" surfaces.  Reads only from the bundle, so the shared
text always matches what the API returned for the same comparison.
"""

from __future__ import annotations

from app.narrative.aggregator import NarrativeBundle
from app.narrative.comparator import Relation
from app.narrative.dimensions import DIMENSION_TITLES, LEVEL_LABELS

SHARE_TITLE = "Our minds side by side"
SHARE_SUBTITLE = "For understanding differences, not judging them"

RELATION_LABELS: dict[Relation, str] = {
    Relation.SIMILAR: "similar",
    Relation.DIFFERENT: "different",
    Relation.VERY_DIFFERENT: "very different",
}

UNKNOWN_LEVEL_LABEL = "unknown"

NO_SIMILARITIES_TEXT = (
    "Full alignment is rare in these results; this points to different styles, not a problem."
)
NO_DIFFERENCES_TEXT = "No marked difference was found between you in these results."
VERY_DIFFERENT_BRIDGE = (
    "These differences are more about the rhythm of mental processing than about intentions or values."
)


def build_share_text(bundle: NarrativeBundle, invite_url: str | None = None) -> str:
    """Render *bundle* as a multi-line plain-text summary."""
    lines: list[str] = [SHARE_TITLE, SHARE_SUBTITLE, ""]

    lines += [f"{bundle.name_a} × {bundle.name_b}", ""]

    lines.append(f"Overall similarity: {bundle.similarity_label.value}")
    lines.append(f"Risk of misunderstanding: {bundle.risk_label.value}")
    lines += [bundle.risk_phrase, ""]

    lines += [bundle.headline, "", bundle.dominant_difference.text, ""]
    lines += [bundle.similarity_complement, ""]

    # Mental map
    lines += ["Mental map", ""]
    for entry in bundle.mental_map:
        a_level = LEVEL_LABELS[entry.a_level] if entry.a_level else UNKNOWN_LEVEL_LABEL
        b_level = LEVEL_LABELS[entry.b_level] if entry.b_level else UNKNOWN_LEVEL_LABEL
        relation = UNKNOWN_LEVEL_LABEL if entry.is_unknown else RELATION_LABELS[entry.relation]
        lines.append(f"{entry.title}: {relation}")
        lines.append(f"{bundle.name_a}: {a_level} | {bundle.name_b}: {b_level}")
        lines += [entry.text, ""]

    # Similarities / differences
    lines += ["Similarities and differences", "", "Similarities:"]
    if bundle.similarities:
        lines += [f"• {DIMENSION_TITLES[d]}" for d in bundle.similarities]
    else:
        lines.append(NO_SIMILARITIES_TEXT)
    lines += ["", "Differences:"]
    if bundle.differences:
        very_different = set(bundle.insights.very_different_dimensions)
        for dim in bundle.differences:
            marker = " (very different)" if dim in very_different else ""
            lines.append(f"• {DIMENSION_TITLES[dim]}{marker}")
    else:
        lines.append(NO_DIFFERENCES_TEXT)
    lines.append("")

    # Sections that fell back to the safety template are left out here;
    # the safety text closes the export exactly once.
    safety_id = bundle.safety.template_id

    if bundle.key_differences is None:
        lines += [VERY_DIFFERENT_BRIDGE, ""]
    elif bundle.key_differences.template_id != safety_id:
        lines += [bundle.key_differences.text, ""]

    if bundle.loop.template_id != safety_id:
        lines += [bundle.loop.title, bundle.loop.text, ""]

    if bundle.triggers.items:
        lines.append("Situations that activate it:")
        lines += [f"• {item}" for item in bundle.triggers.items]
        lines.append("")

    if bundle.felt_experience.template_id != safety_id:
        lines += [bundle.felt_experience_title, bundle.felt_experience.text, ""]

    lines += [bundle.safety.text]

    if invite_url:
        lines += ["", "Take the rumination quiz:", invite_url]

    return "\n".join(lines)
