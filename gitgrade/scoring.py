"""
Score aggregation: six dimension scores to one verdict.

Pure and deterministic; no I/O.
"""

from gitgrade.models import Badge, DimensionScores, SkillLevel, Verdict

# Weights in integer percent so the weighted sum stays exact
# Total score = round_half_up(Sum(score × weight) / 100)
DIMENSION_WEIGHT_PERCENT = {
    "code_quality": 30,
    "project_structure": 20,
    "documentation": 15,
    "test_coverage": 15,
    "real_world_relevance": 10,
    "commit_consistency": 10,
}

DIMENSION_WEIGHTS = {
    field: percent / 100 for field, percent in DIMENSION_WEIGHT_PERCENT.items()
}

# (upper bound inclusive, category), checked in order
SKILL_LEVEL_THRESHOLDS: list[tuple[int, SkillLevel]] = [
    (50, SkillLevel.BEGINNER),
    (80, SkillLevel.INTERMEDIATE),
    (100, SkillLevel.ADVANCED),
]

BADGE_THRESHOLDS: list[tuple[int, Badge]] = [
    (40, Badge.BRONZE),
    (70, Badge.SILVER),
    (100, Badge.GOLD),
]


def compute_weighted_score(scores: DimensionScores) -> int:
    """
    Computes the weighted overall score on a 0-100 scale.

    - Code Quality: 30%
    - Project Structure: 20%
    - Documentation: 15%
    - Test Coverage: 15%
    - Real-world Relevance: 10%
    - Commit Consistency: 10%

    Halves round up (e.g. 74.5 -> 75).
    """
    weighted_sum = sum(
        getattr(scores, field) * percent
        for field, percent in DIMENSION_WEIGHT_PERCENT.items()
    )
    total_score = (weighted_sum + 50) // 100
    return max(0, min(100, total_score))


def classify_skill_level(score: int) -> SkillLevel:
    """Map a 0-100 score to Beginner (0-50), Intermediate (51-80) or Advanced (81-100)."""
    for upper_bound, level in SKILL_LEVEL_THRESHOLDS:
        if score <= upper_bound:
            return level
    return SKILL_LEVEL_THRESHOLDS[-1][1]


def classify_badge(score: int) -> Badge:
    """Map a 0-100 score to Bronze (0-40), Silver (41-70) or Gold (71-100)."""
    for upper_bound, badge in BADGE_THRESHOLDS:
        if score <= upper_bound:
            return badge
    return BADGE_THRESHOLDS[-1][1]


def aggregate(scores: DimensionScores) -> Verdict:
    """
    Combine dimension scores into a Verdict.

    Args:
        scores: Validated dimension scores.

    Returns:
        Verdict with the weighted score, skill level and badge.
    """
    numerical_score = compute_weighted_score(scores)
    return Verdict(
        numerical_score=numerical_score,
        skill_level=classify_skill_level(numerical_score),
        badge=classify_badge(numerical_score),
    )
