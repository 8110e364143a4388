"""
GitGrade: repository quality grading from readme, manifest and file tree.
"""

from gitgrade.errors import (
    AnalysisSchemaViolation,
    GenerationServiceFailure,
    GitGradeError,
    InvalidReference,
    UpstreamHostFailure,
)
from gitgrade.models import (
    AnalysisResult,
    Badge,
    ContentSnapshot,
    DimensionScores,
    Priority,
    RoadmapStep,
    SkillLevel,
    Verdict,
)
from gitgrade.pipeline import analyze_repository, analyze_repository_sync
from gitgrade.repository import RepositoryRef, parse_repository_url
from gitgrade.scoring import aggregate

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "AnalysisSchemaViolation",
    "Badge",
    "ContentSnapshot",
    "DimensionScores",
    "GenerationServiceFailure",
    "GitGradeError",
    "InvalidReference",
    "Priority",
    "RepositoryRef",
    "RoadmapStep",
    "SkillLevel",
    "UpstreamHostFailure",
    "Verdict",
    "aggregate",
    "analyze_repository",
    "analyze_repository_sync",
    "parse_repository_url",
]
