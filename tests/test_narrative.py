"""
Tests for the narrative summary.
"""

import asyncio

import pytest

from gitgrade.errors import GenerationServiceFailure
from gitgrade.models import MAX_SUMMARY_SENTENCES, DimensionScores
from gitgrade.narrative import summarize
from tests._fixtures.stubs import DIMENSIONS_REPLY, SUMMARY_REPLY, StubGenerationService

SCORES = DimensionScores.model_validate(DIMENSIONS_REPLY)


def test_summary_returned():
    service = StubGenerationService()
    assert asyncio.run(summarize(SCORES, service)) == SUMMARY_REPLY["summary"]


def test_instruction_restates_scores():
    service = StubGenerationService()
    asyncio.run(summarize(SCORES, service))

    instruction = service.calls_for("Summary")[0]
    assert "2-3 sentence" in instruction
    assert "Code Quality: 90/100 (strong)" in instruction
    assert "Real-world Relevance: 50/100 (weak)" in instruction


def test_summary_is_stripped():
    service = StubGenerationService({"Summary": {"summary": "  Good tests.  \n"}})
    assert asyncio.run(summarize(SCORES, service)) == "Good tests."


@pytest.mark.parametrize("reply", [{}, {"summary": ""}, {"summary": "   "}, {"summary": 42}])
def test_unusable_summary(reply):
    service = StubGenerationService({"Summary": reply})
    with pytest.raises(GenerationServiceFailure, match="Summary"):
        asyncio.run(summarize(SCORES, service))


def test_service_failure_propagates():
    service = StubGenerationService({"Summary": GenerationServiceFailure("quota exceeded")})
    with pytest.raises(GenerationServiceFailure, match="quota exceeded"):
        asyncio.run(summarize(SCORES, service))


def test_summary_may_run_a_little_long():
    text = "Clear layout. Good docs. Some tests. No CI. Few commits."
    service = StubGenerationService({"Summary": {"summary": text}})
    assert asyncio.run(summarize(SCORES, service)) == text


def test_rambling_summary_rejected():
    text = " ".join(f"Point {i} matters." for i in range(MAX_SUMMARY_SENTENCES + 1))
    service = StubGenerationService({"Summary": {"summary": text}})
    with pytest.raises(GenerationServiceFailure, match="Summary"):
        asyncio.run(summarize(SCORES, service))
