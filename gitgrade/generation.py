"""
Generation service capability.

The dimension, summary and roadmap steps talk to a language model only
through the GenerationService protocol: an instruction plus a JSON schema in,
a JSON object out. OpenAIGenerationService implements it for any
OpenAI-compatible chat completions endpoint; tests substitute a
deterministic stub.
"""

import asyncio
import json
import os
from typing import Any, Protocol

import openai
from dotenv import load_dotenv
from openai import AsyncOpenAI

from gitgrade.config import get_llm_base_url, get_model, get_request_timeout
from gitgrade.errors import GenerationServiceFailure, GitGradeError

# Load environment variables
load_dotenv()

SYSTEM_PROMPT = (
    "You are an AI expert in evaluating GitHub repositories. "
    "Respond with a single JSON object and nothing else. "
    "The object must conform to this JSON schema:\n"
)


class MalformedOutput(GenerationServiceFailure):
    """The service answered, but not with a JSON object."""


class GenerationService(Protocol):
    """Anything that turns an instruction and a schema into a JSON object."""

    async def generate(
        self, instruction: str, schema: dict[str, Any]
    ) -> dict[str, Any]: ...


def parse_json_object(raw_content: str | None) -> dict[str, Any]:
    """
    Parse a model reply into a JSON object.

    Tolerates a surrounding markdown code fence.

    Raises:
        MalformedOutput: If the reply is empty, not JSON, or not an object.
    """
    if raw_content is None or not raw_content.strip():
        raise MalformedOutput("Generation service returned an empty response.")

    content = raw_content.strip()
    if content.startswith("```"):
        lines = content.split("\n")
        content = "\n".join(lines[1:-1] if lines[-1].strip() == "```" else lines[1:])

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedOutput(
            f"Generation service returned invalid JSON: {e}", cause=e
        ) from e

    if not isinstance(data, dict):
        raise MalformedOutput(
            f"Generation service returned {type(data).__name__}, expected a JSON object."
        )
    return data


class OpenAIGenerationService:
    """GenerationService backed by the OpenAI chat completions API (JSON mode)."""

    def __init__(
        self,
        model: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        temperature: float = 0.2,
        client: AsyncOpenAI | None = None,
    ):
        """
        Initialize the service.

        Args:
            model: Model name. Defaults to the configured model.
            api_key: API key. If not provided, reads from OPENAI_API_KEY.
            base_url: OpenAI-compatible endpoint. Defaults to the configured one.
            temperature: Sampling temperature.
            client: Preconfigured client (used by tests).

        Raises:
            ValueError: If no API key is available and no client is given.
        """
        self.model = model or get_model()
        self.temperature = temperature

        if client is not None:
            self._client = client
            return

        key = api_key or os.getenv("OPENAI_API_KEY")
        if not key:
            raise ValueError(
                "OPENAI_API_KEY is required for the generation service.\n"
                "\n"
                "Set the key:\n"
                "   export OPENAI_API_KEY='your_key_here'  # Linux/macOS\n"
                "   or add to your .env file: OPENAI_API_KEY=your_key_here\n"
                "For an OpenAI-compatible server, also set GITGRADE_LLM_BASE_URL.\n"
            )
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=base_url or get_llm_base_url(),
            timeout=get_request_timeout(),
            # Retrying is the pipeline's decision, not the SDK's
            max_retries=0,
        )

    async def generate(
        self, instruction: str, schema: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Request a JSON object conforming to schema.

        Raises:
            GenerationServiceFailure: If the API call fails.
            MalformedOutput: If the reply is not a JSON object.
        """
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT + json.dumps(schema, indent=2)},
            {"role": "user", "content": instruction},
        ]
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            raise GenerationServiceFailure(
                f"Generation request failed: {e}", cause=e
            ) from e

        if not response.choices:
            raise MalformedOutput("Generation service returned no choices.")
        return parse_json_object(response.choices[0].message.content)


async def request_structured(
    service: GenerationService,
    instruction: str,
    schema: dict[str, Any],
    purpose: str,
    timeout: float | None = None,
) -> dict[str, Any]:
    """
    Call a generation service with a bounded wait.

    Args:
        service: The generation capability.
        instruction: Natural-language instruction.
        schema: JSON schema the reply must follow.
        purpose: Short label used in error messages ('summary', 'roadmap', ...).
        timeout: Seconds to wait. Defaults to the configured request timeout.

    Returns:
        The reply as a dict (not yet validated against schema).

    Raises:
        GenerationServiceFailure: On timeout or any service error.
    """
    timeout = get_request_timeout() if timeout is None else timeout
    try:
        data = await asyncio.wait_for(
            service.generate(instruction, schema), timeout=timeout
        )
    except TimeoutError as e:
        raise GenerationServiceFailure(
            f"Generation of the {purpose} timed out after {timeout:g}s.", cause=e
        ) from e
    except GitGradeError:
        raise
    except Exception as e:
        raise GenerationServiceFailure(
            f"Generation of the {purpose} failed: {e}", cause=e
        ) from e

    if not isinstance(data, dict):
        raise MalformedOutput(
            f"Generation of the {purpose} returned {type(data).__name__}, "
            "expected a JSON object."
        )
    return data
