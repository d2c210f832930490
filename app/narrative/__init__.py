"""
Mind Compare — comparison narrative engine.

Public surface of the engine: score parsing, per-dimension comparison, the
comparison state, template repository / resolution and the narrative bundle.
"""

from app.narrative.aggregator import NarrativeAggregator, NarrativeBundle
from app.narrative.comparator import DimensionComparison, Direction, Relation, compare_dimension
from app.narrative.dimensions import DIMENSION_ORDER, DOMINANT_PRIORITY, DimensionKey, Level
from app.narrative.insights import AggregatedInsights, RiskLevel, SimilarityLevel, aggregate_insights
from app.narrative.renderer import render_template
from app.narrative.resolver import FallbackResolver, ResolutionTier
from app.narrative.scores import Known, Unknown, parse_score, parse_score_map
from app.narrative.share_text import build_share_text
from app.narrative.state import ComparisonState, build_comparison_state, compare_profiles
from app.narrative.templates import Scope, Section, Template, TemplateQuery, TemplateRepository, Variance

__all__ = [
    "NarrativeAggregator",
    "NarrativeBundle",
    "DimensionComparison",
    "Direction",
    "Relation",
    "compare_dimension",
    "DIMENSION_ORDER",
    "DOMINANT_PRIORITY",
    "DimensionKey",
    "Level",
    "AggregatedInsights",
    "RiskLevel",
    "SimilarityLevel",
    "aggregate_insights",
    "render_template",
    "FallbackResolver",
    "ResolutionTier",
    "Known",
    "Unknown",
    "parse_score",
    "parse_score_map",
    "build_share_text",
    "ComparisonState",
    "build_comparison_state",
    "compare_profiles",
    "Scope",
    "Section",
    "Template",
    "TemplateQuery",
    "TemplateRepository",
    "Variance",
]
