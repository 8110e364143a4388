"""
Commit consistency dimension.

Commit history is not part of the snapshot, so this dimension is always a
fixed default derived from the other five scores.
"""

from gitgrade.dimensions.base import DimensionSpec
from gitgrade.models import ContentSnapshot

HEALTHY_SCORE = 75
DEFAULT_SCORE = 50
# Average of the other dimensions must be strictly above this
HEALTHY_AVERAGE_THRESHOLD = 50


def check_commit_consistency(other_scores: dict[str, int]) -> int:
    """
    Derive the commit consistency default.

    Scoring:
    - Other dimensions average above 50: 75/100
    - Otherwise (or nothing to average): 50/100
    """
    others = [score for key, score in other_scores.items() if key != DIMENSION.key]
    if not others:
        return DEFAULT_SCORE
    average = sum(others) / len(others)
    return HEALTHY_SCORE if average > HEALTHY_AVERAGE_THRESHOLD else DEFAULT_SCORE


def _fallback(_snapshot: ContentSnapshot, scores: dict[str, int]) -> int:
    return check_commit_consistency(scores)


DIMENSION = DimensionSpec(
    key="commitConsistency",
    field="commit_consistency",
    label="Commit Consistency",
    guidance=(
        "Commit history is not available. Score 75 if the other five "
        "dimensions average above 50, otherwise 50."
    ),
    fallback=_fallback,
)
