"""
Dimension registry.

Order matters: commit consistency is derived from the dimensions before it.
"""

from gitgrade.dimensions import (
    code_quality,
    commit_consistency,
    documentation,
    project_structure,
    real_world_relevance,
    test_coverage,
)
from gitgrade.dimensions.base import DimensionSpec

DIMENSION_SPECS: list[DimensionSpec] = [
    code_quality.DIMENSION,
    project_structure.DIMENSION,
    documentation.DIMENSION,
    test_coverage.DIMENSION,
    real_world_relevance.DIMENSION,
    commit_consistency.DIMENSION,
]


def get_dimension_spec(key: str) -> DimensionSpec:
    """
    Look up a dimension by wire name or attribute name.

    Raises:
        KeyError: If no dimension matches.
    """
    for spec in DIMENSION_SPECS:
        if key in (spec.key, spec.field):
            return spec
    raise KeyError(f"Unknown dimension: {key}")


__all__ = ["DIMENSION_SPECS", "DimensionSpec", "get_dimension_spec"]
