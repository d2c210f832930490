"""Shared pytest fixtures for Mind Compare tests."""
import pytest

from app.narrative.aggregator import NarrativeAggregator
from app.narrative.corpus_en import DEFAULT_TEMPLATES
from app.narrative.dimensions import DIMENSION_ORDER
from app.narrative.resolver import FallbackResolver
from app.narrative.state import compare_profiles
from app.narrative.templates import TemplateRepository
from app.narrative.tracing import CollectingSink


def scores(*values):
    """Score map in DIMENSION_ORDER: scores(stickiness, past, future, interpersonal)."""
    return dict(zip(DIMENSION_ORDER, values))


def make_state(a_values, b_values, name_a="Sara", name_b="Omid"):
    return compare_profiles(scores(*a_values), scores(*b_values), name_a, name_b)


@pytest.fixture
def repository():
    return TemplateRepository(DEFAULT_TEMPLATES)


@pytest.fixture
def defect_sink():
    return CollectingSink()


@pytest.fixture
def trace_sink():
    return CollectingSink()


@pytest.fixture
def resolver(repository, defect_sink):
    return FallbackResolver(repository, defect_sink=defect_sink)


@pytest.fixture
def aggregator(repository, trace_sink, defect_sink):
    return NarrativeAggregator(repository, trace_sink=trace_sink, defect_sink=defect_sink)


@pytest.fixture
def all_very_different_state():
    """Scenario A: every dimension very different, B higher everywhere."""
    return make_state((0.5, 0.5, 0.5, 0.5), (3.5, 3.5, 3.5, 3.5))


@pytest.fixture
def identical_state():
    """Scenario B: identical mid-range profiles."""
    return make_state((2.0, 2.0, 2.0, 2.0), (2.0, 2.0, 2.0, 2.0))


@pytest.fixture
def one_unknown_state():
    """Scenario C: stickiness unknown for A, past brooding strongly different."""
    return make_state((None, 0.5, 2.0, 2.0), (3.0, 3.0, 2.1, 2.0))


@pytest.fixture
def very_low_confidence_state():
    """Only future worry is known for both people."""
    return make_state((None, None, 2.0, None), (1.0, None, 3.5, None))
