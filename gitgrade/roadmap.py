"""Improvement roadmap generation."""

from pydantic import ValidationError

from gitgrade.errors import GenerationServiceFailure
from gitgrade.generation import GenerationService, request_structured
from gitgrade.models import DimensionScores, Roadmap, RoadmapStep
from gitgrade.prompts import build_roadmap_instruction


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "response"
    return f"{location}: {first['msg']}"


def parse_roadmap(raw: dict) -> tuple[RoadmapStep, ...]:
    """
    Validate a roadmap reply.

    The generator's order is kept as the presentation order.

    Raises:
        GenerationServiceFailure: If there are not 3-5 well-formed steps.
    """
    try:
        roadmap = Roadmap.model_validate(raw)
    except ValidationError as e:
        raise GenerationServiceFailure(
            f"Roadmap did not match the expected schema ({_describe_validation_error(e)})",
            cause=e,
        ) from e
    return tuple(roadmap.roadmap)


async def generate_roadmap(
    scores: DimensionScores,
    service: GenerationService,
    timeout: float | None = None,
) -> tuple[RoadmapStep, ...]:
    """
    Generate 3-5 prioritized improvement steps.

    Raises:
        GenerationServiceFailure: If the service fails or the reply is malformed.
    """
    raw = await request_structured(
        service,
        build_roadmap_instruction(scores),
        Roadmap.model_json_schema(by_alias=True),
        purpose="roadmap",
        timeout=timeout,
    )
    return parse_roadmap(raw)
