"""Narrative summary generation."""

from pydantic import ValidationError

from gitgrade.errors import GenerationServiceFailure
from gitgrade.generation import GenerationService, request_structured
from gitgrade.models import DimensionScores, Summary
from gitgrade.prompts import build_summary_instruction


async def summarize(
    scores: DimensionScores,
    service: GenerationService,
    timeout: float | None = None,
) -> str:
    """
    Generate a 2-3 sentence summary of strengths and weaknesses.

    Raises:
        GenerationServiceFailure: If the service fails or the reply has no usable summary.
    """
    raw = await request_structured(
        service,
        build_summary_instruction(scores),
        Summary.model_json_schema(),
        purpose="summary",
        timeout=timeout,
    )
    try:
        return Summary.model_validate(raw).summary
    except ValidationError as e:
        raise GenerationServiceFailure(
            f"Summary did not match the expected schema: {e.errors()[0]['msg']}",
            cause=e,
        ) from e
