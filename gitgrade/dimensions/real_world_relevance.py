"""Real-world relevance dimension."""

from gitgrade.dimensions.base import DimensionSpec
from gitgrade.models import ContentSnapshot

NO_README_SCORE = 50


def check_real_world_relevance(snapshot: ContentSnapshot) -> int | None:
    """Neutral 50/100 when there is no README to judge usefulness from."""
    if snapshot.readme is None:
        return NO_README_SCORE
    return None


def _fallback(snapshot: ContentSnapshot, _scores: dict[str, int]) -> int | None:
    return check_real_world_relevance(snapshot)


DIMENSION = DimensionSpec(
    key="realWorldRelevance",
    field="real_world_relevance",
    label="Real-world Relevance",
    guidance=(
        f"If no README is provided, score {NO_README_SCORE}. Otherwise judge "
        "whether the project solves a real problem for real users."
    ),
    fallback=_fallback,
)
