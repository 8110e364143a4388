"""Documentation dimension."""

from gitgrade.dimensions.base import DimensionSpec
from gitgrade.models import ContentSnapshot

NO_README_SCORE = 10
# READMEs shorter than this (ignoring whitespace) count as trivially short
MIN_README_CHARS = 50


def has_substantial_readme(readme: str | None) -> bool:
    """Whether a README exists and says more than a title line."""
    if readme is None:
        return False
    return len("".join(readme.split())) >= MIN_README_CHARS


def check_documentation(snapshot: ContentSnapshot) -> int | None:
    """
    Fixed score when the README is absent or trivially short.

    Scoring:
    - No README, or fewer than 50 non-blank characters: 10/100
    - Otherwise: judged by the generation step
    """
    if not has_substantial_readme(snapshot.readme):
        return NO_README_SCORE
    return None


def _fallback(snapshot: ContentSnapshot, _scores: dict[str, int]) -> int | None:
    return check_documentation(snapshot)


DIMENSION = DimensionSpec(
    key="documentation",
    field="documentation",
    label="Documentation",
    guidance=(
        f"If the README is missing or only a line or two, score {NO_README_SCORE}. "
        "Otherwise judge how well it explains purpose, installation, usage "
        "and contribution."
    ),
    fallback=_fallback,
)
