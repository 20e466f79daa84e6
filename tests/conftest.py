"""Test configuration and common fixtures."""

import asyncio
from typing import Dict, List, Optional, Sequence, Union

import pytest

from news_checker.domain.models.claim import Claim
from news_checker.domain.models.evidence import EvidenceRecord, SearchOutcome, SourceMode
from news_checker.domain.ports.llm_provider import LLMCompletion, LLMRequestOptions

Scripted = Union[str, LLMCompletion, Exception]


class ScriptedLLM:
    """LLM provider returning scripted answers in call order."""

    def __init__(self, responses: Sequence[Scripted] = ()):
        """Initialize with the answers to return."""
        self.responses: List[Scripted] = list(responses)
        self.calls: List[tuple] = []

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: Optional[LLMRequestOptions] = None,
    ) -> LLMCompletion:
        """Record the call and return the next scripted answer."""
        self.calls.append((system_prompt, user_prompt, options))
        if not self.responses:
            raise AssertionError("Unexpected LLM call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return LLMCompletion(content=response)
        return response

    @property
    def provider_name(self) -> str:
        return "Scripted"

    @property
    def is_available(self) -> bool:
        return True


class StaticEvidenceProvider:
    """Evidence provider answering from a query -> outcome table."""

    def __init__(
        self,
        outcomes: Optional[Dict[str, SearchOutcome]] = None,
        delays: Optional[Dict[str, float]] = None,
        default: Optional[SearchOutcome] = None,
    ):
        self.outcomes = outcomes or {}
        self.delays = delays or {}
        self.default = default or SearchOutcome.unavailable()
        self.queries: List[str] = []

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def search(self, query: str) -> SearchOutcome:
        self.queries.append(query)
        if query in self.delays:
            await asyncio.sleep(self.delays[query])
        return self.outcomes.get(query, self.default)

    @property
    def provider_name(self) -> str:
        return "static"


def records(prefix: str, count: int, start: int = 0) -> List[EvidenceRecord]:
    """Build distinct evidence records."""
    return [
        EvidenceRecord(
            title=f"{prefix} title {i}",
            url=f"https://{prefix}.example.com/{i}",
            snippet=f"{prefix} snippet {i}",
        )
        for i in range(start, start + count)
    ]


def live(items: List[EvidenceRecord]) -> SearchOutcome:
    return SearchOutcome(records=items, source_mode=SourceMode.LIVE_WEB)


@pytest.fixture
def claim() -> Claim:
    """A time-sensitive claim."""
    return Claim(text="The Prime Minister resigned this morning.")
