"""
Tests for the real_world_relevance dimension.
"""

from gitgrade.dimensions.real_world_relevance import (
    NO_README_SCORE,
    check_real_world_relevance,
)
from gitgrade.models import ContentSnapshot


def test_no_readme_is_neutral():
    assert check_real_world_relevance(ContentSnapshot()) == NO_README_SCORE == 50


def test_readme_present_is_judged():
    assert check_real_world_relevance(ContentSnapshot(readme="# tool\n")) is None
