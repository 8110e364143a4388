"""
Data structures shared across the analysis pipeline.

Generation outputs are pydantic models so they can be validated and handed
to the generation service as JSON schemas. Values the pipeline derives
itself are plain NamedTuples.
"""

import re
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enums ---


class SkillLevel(str, Enum):
    """Skill-level category of the aggregate score."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Badge(str, Enum):
    """Badge tier of the aggregate score."""

    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"


class Priority(str, Enum):
    """Priority of a roadmap step."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# --- Fetched content ---


class ContentSnapshot(NamedTuple):
    """Bounded repository metadata used as evidence. Every field may be absent."""

    readme: str | None = None
    manifest: str | None = None
    manifest_path: str | None = None
    file_tree: tuple[str, ...] | None = None

    @property
    def missing_fields(self) -> list[str]:
        """Names of the artifacts that could not be retrieved."""
        missing = []
        if self.readme is None:
            missing.append("readme")
        if self.manifest is None:
            missing.append("manifest")
        if self.file_tree is None:
            missing.append("file_tree")
        return missing


# --- Generation schemas ---

class DimensionScores(BaseModel):
    """The six 0-100 quality dimensions of a repository."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    code_quality: int = Field(alias="codeQuality", ge=0, le=100)
    project_structure: int = Field(alias="projectStructure", ge=0, le=100)
    documentation: int = Field(ge=0, le=100)
    test_coverage: int = Field(alias="testCoverage", ge=0, le=100)
    real_world_relevance: int = Field(alias="realWorldRelevance", ge=0, le=100)
    commit_consistency: int = Field(alias="commitConsistency", ge=0, le=100)

    def to_dict(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)


class RoadmapStep(BaseModel):
    """One actionable improvement recommendation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    step: str = Field(min_length=1, description="The actionable step to improve the repository.")
    priority: Priority = Field(description="The priority of the step.")
    effort_estimate: str = Field(
        alias="effortEstimate",
        min_length=1,
        description="An estimate of the effort required to complete the step.",
    )

    @field_validator("step", "effort_estimate")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class Roadmap(BaseModel):
    """Ordered improvement plan: between three and five steps."""

    roadmap: list[RoadmapStep] = Field(min_length=3, max_length=5)


# Summaries are asked for in 2-3 sentences. Shorter ones and a little overrun
# are accepted; a reply past this bound is not a summary.
MAX_SUMMARY_SENTENCES = 6

_SENTENCE_END = re.compile(r"[.!?]+(?=\s|$)")


class Summary(BaseModel):
    """Short prose evaluation of a repository."""

    summary: str = Field(
        min_length=1,
        description="A concise (2-3 sentences) summary of the repository's strengths and weaknesses.",
    )

    @field_validator("summary")
    @classmethod
    def _check_summary(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        sentences = len(_SENTENCE_END.findall(value))
        if sentences > MAX_SUMMARY_SENTENCES:
            raise ValueError(
                f"must be at most {MAX_SUMMARY_SENTENCES} sentences, got {sentences}"
            )
        return value


# --- Derived results ---


class Verdict(NamedTuple):
    """Aggregate score with its skill-level and badge classification."""

    numerical_score: int
    skill_level: SkillLevel
    badge: Badge

    def to_dict(self) -> dict[str, Any]:
        return {
            "numericalScore": self.numerical_score,
            "skillLevel": self.skill_level.value,
            "badge": self.badge.value,
        }


class AnalysisResult(NamedTuple):
    """The result of a repository analysis."""

    repo_url: str
    analysis: DimensionScores
    score: Verdict
    summary: str
    roadmap: tuple[RoadmapStep, ...]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation using the camelCase field names."""
        return {
            "repoUrl": self.repo_url,
            "analysis": self.analysis.to_dict(),
            "score": self.score.to_dict(),
            "summary": self.summary,
            "roadmap": [
                step.model_dump(by_alias=True, mode="json") for step in self.roadmap
            ],
        }
