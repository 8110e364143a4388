"""
Shared dimension types.
"""

from typing import Callable, NamedTuple

from gitgrade.models import ContentSnapshot


class DimensionSpec(NamedTuple):
    """Specification for one quality dimension."""

    key: str  # wire name, e.g. "codeQuality"
    field: str  # DimensionScores attribute, e.g. "code_quality"
    label: str
    guidance: str  # scoring instruction for the generation step
    # Returns a fixed score when the dimension's signal is absent, else None.
    # The second argument holds the scores settled so far, in registry order.
    fallback: Callable[[ContentSnapshot, dict[str, int]], int | None]
