"""Tests for the terminal runner."""

import json
from typing import Callable, Iterator

import pytest
from rich.console import Console

from news_checker.domain.models.errors import ErrorKind, PipelineError
from news_checker.domain.services.fact_checking_service import FactCheckingService
from news_checker.infrastructure.config import AppConfig
from news_checker.infrastructure.dependencies import ServiceContainer
from news_checker.main import run

from conftest import ScriptedLLM, StaticEvidenceProvider

FAKE_VERDICT = json.dumps({
    "verdict": "fake",
    "confidence": 88,
    "explanation": "No outlet reports this.",
    "redFlags": ["Anonymous source"],
})


def scripted_input(lines) -> Callable[[str], str]:
    answers: Iterator[str] = iter(lines)

    def read_input(prompt: str) -> str:
        return next(answers)

    return read_input


def make_container(llm: ScriptedLLM) -> ServiceContainer:
    return ServiceContainer(
        config=AppConfig(llm_api_key="llm-key"),
        fact_checking_service=FactCheckingService(llm, StaticEvidenceProvider()),
    )


@pytest.mark.asyncio
async def test_run_prints_verdict():
    console = Console(record=True, width=100)
    llm = ScriptedLLM(["STATIC_ANALYSIS_OK", FAKE_VERDICT])

    await run(make_container(llm), scripted_input(["Aliens landed in Paris", "quit"]), console)

    output = console.export_text()
    assert "FAKE (88%)" in output
    assert "No outlet reports this." in output
    assert "Anonymous source" in output
    assert len(llm.calls) == 2


@pytest.mark.asyncio
async def test_run_reports_errors_and_continues():
    console = Console(record=True, width=100)
    llm = ScriptedLLM([PipelineError(ErrorKind.RATE_LIMITED)])

    await run(make_container(llm), scripted_input(["   ", "Some claim", "exit"]), console)

    output = console.export_text()
    assert "Please provide text to analyze" in output
    assert "Rate limit exceeded" in output


@pytest.mark.asyncio
async def test_run_stops_at_end_of_input():
    def read_input(prompt: str) -> str:
        raise EOFError

    console = Console(record=True)
    await run(make_container(ScriptedLLM()), read_input, console)

    assert "News Checker" in console.export_text()
