"""
Dimension analysis: snapshot in, six validated 0-100 scores out.
"""

import math
from typing import Any

from rich.console import Console

from gitgrade.dimensions import DIMENSION_SPECS
from gitgrade.errors import AnalysisSchemaViolation
from gitgrade.generation import GenerationService, MalformedOutput, request_structured
from gitgrade.models import ContentSnapshot, DimensionScores
from gitgrade.prompts import build_corrective_instruction, build_dimension_instruction

console = Console(stderr=True)

SCORE_MIN = 0
SCORE_MAX = 100


def _coerce_score(value: Any) -> int | None:
    """Convert a reply value to an int in [0, 100], or None if it is not a number."""
    # bool is an int subclass but never a score
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    # Round half up, then clamp
    rounded = math.floor(value + 0.5)
    return max(SCORE_MIN, min(SCORE_MAX, rounded))


def coerce_dimension_scores(
    raw: dict[str, Any] | None,
) -> tuple[dict[str, int], list[str]]:
    """
    Coerce a generation reply into the six dimension values.

    Keys are accepted in wire (camelCase) or attribute (snake_case) form.
    Numbers and numeric strings are rounded and clamped to [0, 100].

    Returns:
        Tuple of (values keyed by wire name, list of problems). The values
        are complete only when the problem list is empty.
    """
    if raw is None:
        return {}, ["the response was not a JSON object"]

    values: dict[str, int] = {}
    problems: list[str] = []
    for spec in DIMENSION_SPECS:
        if spec.key in raw:
            value = raw[spec.key]
        elif spec.field in raw:
            value = raw[spec.field]
        else:
            problems.append(f"{spec.key} is missing")
            continue

        score = _coerce_score(value)
        if score is None:
            problems.append(f"{spec.key} must be a number between 0 and 100, got {value!r}")
            continue
        values[spec.key] = score

    return values, problems


def apply_fallbacks(snapshot: ContentSnapshot, values: dict[str, int]) -> DimensionScores:
    """
    Replace scores whose signal is absent from the snapshot with fixed defaults.

    Args:
        snapshot: The evidence the scores were judged from.
        values: All six scores keyed by wire name.

    Returns:
        Validated DimensionScores.
    """
    settled: dict[str, int] = {}
    for spec in DIMENSION_SPECS:
        fallback = spec.fallback(snapshot, settled)
        settled[spec.key] = values[spec.key] if fallback is None else fallback
    return DimensionScores.model_validate(settled)


class DimensionAnalyzer:
    """Scores a snapshot on the six dimensions through a generation service."""

    def __init__(self, service: GenerationService, timeout: float | None = None):
        self.service = service
        self.timeout = timeout

    async def analyze(
        self, snapshot: ContentSnapshot, repository: str = "repository"
    ) -> DimensionScores:
        """
        Derive DimensionScores from a snapshot.

        An invalid reply is retried once with a corrective instruction.

        Raises:
            AnalysisSchemaViolation: If the reply is still invalid after the retry.
            GenerationServiceFailure: If the service errors or times out.
        """
        instruction = build_dimension_instruction(repository, snapshot)
        values, problems = await self._attempt(instruction)

        if problems:
            console.print(
                f"  [yellow]⚠️  Dimension scores rejected ({'; '.join(problems)}), "
                "retrying once[/yellow]"
            )
            corrective = build_corrective_instruction(instruction, problems)
            values, problems = await self._attempt(corrective)
            if problems:
                raise AnalysisSchemaViolation(
                    "Dimension analysis returned invalid scores after a corrective "
                    f"retry: {'; '.join(problems)}",
                    problems=problems,
                )

        return apply_fallbacks(snapshot, values)

    async def _attempt(self, instruction: str) -> tuple[dict[str, int], list[str]]:
        schema = DimensionScores.model_json_schema(by_alias=True)
        try:
            raw = await request_structured(
                self.service,
                instruction,
                schema,
                purpose="dimension analysis",
                timeout=self.timeout,
            )
        except MalformedOutput as e:
            return {}, [str(e)]
        return coerce_dimension_scores(raw)
