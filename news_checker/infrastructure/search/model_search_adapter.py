"""Evidence provider that asks the language model to act as a search engine."""

import logging
from typing import Any, List, Optional

from ...domain.models.errors import PipelineError
from ...domain.models.evidence import EvidenceRecord, SearchOutcome, SourceMode
from ...domain.ports.evidence_provider import EvidenceProvider
from ...domain.ports.llm_provider import LLMProvider, LLMRequestOptions
from ...domain.services.response_parsing import extract_json_array

logger = logging.getLogger(__name__)

SEARCH_SYSTEM_PROMPT = """You are a web search engine for a fact-checking system.

Task:
List the most relevant and authoritative web pages for the user's search query.

Rules:
- Return ONLY a JSON array with at most {max_results} objects, no prose.
- Each object must be: {{"title": "<page title>", "url": "<full URL>", "snippet": "<relevant excerpt>"}}
- Only list pages that actually exist. Prefer news agencies, official sources and fact-checkers.
- If you know of no relevant page, return []."""


class ModelSearchAdapter(EvidenceProvider):
    """Model-backed search.

    Grounding citations attached by the provider are preferred. Without
    ``grounded`` the adapter falls back to parsing a JSON list from the
    answer text; with ``grounded`` only citations are accepted.
    """

    def __init__(
        self,
        llm: LLMProvider,
        grounded: bool = False,
        max_results: int = 5,
        provider_name: Optional[str] = None,
    ):
        self._llm = llm
        self._grounded = grounded
        self._max_results = max_results
        self._name = provider_name or ("model-grounding" if grounded else "model-search")

    async def initialize(self) -> None:
        """The language model client is owned by the container."""

    async def search(self, query: str) -> SearchOutcome:
        try:
            completion = await self._llm.complete(
                SEARCH_SYSTEM_PROMPT.format(max_results=self._max_results),
                f"Search query:\n{query}",
                LLMRequestOptions(web_grounding=self._grounded),
            )
        except PipelineError as e:
            logger.warning(f"Model search failed for '{query[:80]}': {e.kind.value}")
            return SearchOutcome.unavailable()

        if completion.citations:
            logger.info(f"Model search returned {len(completion.citations)} grounding citations")
            return SearchOutcome(
                records=completion.citations[: self._max_results],
                source_mode=SourceMode.GROUNDED,
            )
        if self._grounded:
            logger.info("Grounded search returned no citations")
            return SearchOutcome(records=[], source_mode=SourceMode.GROUNDED)

        records = self._parse_listing(completion.content)
        logger.info(f"Model search listed {len(records)} results")
        return SearchOutcome(records=records, source_mode=SourceMode.LIVE_WEB)

    def _parse_listing(self, content: str) -> List[EvidenceRecord]:
        records: List[EvidenceRecord] = []
        seen = set()
        for entry in extract_json_array(content):
            if not isinstance(entry, dict):
                continue
            url = entry.get("url") or entry.get("link")
            if not isinstance(url, str) or not url.startswith(("http://", "https://")):
                continue
            if url in seen:
                continue
            seen.add(url)
            records.append(
                EvidenceRecord(
                    title=_text(entry.get("title")) or "Untitled",
                    url=url,
                    snippet=_text(entry.get("snippet")),
                )
            )
            if len(records) >= self._max_results:
                break
        return records

    async def shutdown(self) -> None:
        """Nothing to release."""

    @property
    def provider_name(self) -> str:
        return self._name


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""
