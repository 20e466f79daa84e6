"""Tests for the live-search decision stage."""

import pytest

from news_checker.domain.models.errors import ErrorKind, PipelineError
from news_checker.domain.services.decision_service import DecisionService

from conftest import ScriptedLLM


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "output, expected",
    [
        ("LIVE_SEARCH_REQUIRED", True),
        ("  LIVE_SEARCH_REQUIRED\n", True),
        ("Decision: LIVE_SEARCH_REQUIRED because it concerns an election", True),
        ("STATIC_ANALYSIS_OK", False),
        ("live_search_required", False),
        ("I am not sure.", False),
        ("{}", False),
    ],
)
async def test_classify(claim, output, expected):
    """Only the live-search sentinel selects live evidence."""
    llm = ScriptedLLM([output])
    assert await DecisionService(llm).classify(claim) is expected


@pytest.mark.asyncio
async def test_classify_prompt(claim):
    """The prompt names both sentinels and quotes the claim."""
    llm = ScriptedLLM(["STATIC_ANALYSIS_OK"])
    await DecisionService(llm).classify(claim)

    system_prompt, user_prompt, options = llm.calls[0]
    assert "LIVE_SEARCH_REQUIRED" in system_prompt
    assert "STATIC_ANALYSIS_OK" in system_prompt
    assert "current office holders" in system_prompt
    assert user_prompt == f'User claim:\n"{claim.text}"'
    assert options is None


@pytest.mark.asyncio
async def test_classify_propagates_errors(claim):
    """Classification failures are not replaced by a default."""
    llm = ScriptedLLM([PipelineError(ErrorKind.RATE_LIMITED)])
    with pytest.raises(PipelineError) as exc_info:
        await DecisionService(llm).classify(claim)
    assert exc_info.value.kind == ErrorKind.RATE_LIMITED
