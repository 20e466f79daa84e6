"""Gathers live web evidence for a claim."""

import asyncio
import logging
from typing import Iterable, List, Optional

from ..models.claim import Claim
from ..models.errors import PipelineError
from ..models.evidence import EvidenceBundle, EvidenceRecord, SearchOutcome
from ..ports.evidence_provider import EvidenceProvider
from ..ports.llm_provider import LLMCompletion, LLMProvider, LLMRequestOptions, ToolSpec

logger = logging.getLogger(__name__)

MAX_QUERIES = 3
MAX_RECORDS = 8
MAX_QUERY_LENGTH = 200

QUERY_TOOL = ToolSpec(
    name="propose_search_queries",
    description="Propose web search queries that would verify the claim.",
    parameters={
        "type": "object",
        "properties": {
            "queries": {
                "type": "array",
                "items": {"type": "string"},
                "description": "One concise search query per distinct sub-claim.",
            }
        },
        "required": ["queries"],
    },
)

QUERY_SYSTEM_PROMPT = f"""You prepare web searches for a fact-checking system.

Split the user's claim into its distinct factual sub-claims and call
{QUERY_TOOL.name} with one concise search query for each of them
(at most {MAX_QUERIES}). Use names, places and dates from the claim."""


def merge_records(outcomes: Iterable[SearchOutcome], limit: int = MAX_RECORDS) -> List[EvidenceRecord]:
    """Merge outcomes in the given order, deduplicating by URL.

    The first record seen for a URL wins. The result is truncated to ``limit``.
    """
    merged: List[EvidenceRecord] = []
    seen = set()
    for outcome in outcomes:
        for record in outcome.records:
            if record.url in seen:
                continue
            seen.add(record.url)
            merged.append(record)
            if len(merged) >= limit:
                return merged
    return merged


def render_evidence(records: Iterable[EvidenceRecord]) -> str:
    """Numbered evidence block for prompt embedding."""
    return "\n\n".join(
        f"{index}. {record.title}\n{record.snippet}\n{record.url}"
        for index, record in enumerate(records, 1)
    )


class EvidenceService:
    """Derives search queries, runs them and merges the results."""

    def __init__(
        self,
        llm: LLMProvider,
        provider: EvidenceProvider,
        max_queries: int = MAX_QUERIES,
        max_records: int = MAX_RECORDS,
    ):
        self._llm = llm
        self._provider = provider
        self._max_queries = max_queries
        self._max_records = max_records

    async def gather(self, claim: Claim, needs_live_evidence: bool) -> EvidenceBundle:
        """Collect evidence for the claim.

        Args:
            claim: Claim being checked
            needs_live_evidence: Output of the decision stage

        Returns:
            Evidence bundle; static with no evidence when search is not
            needed or no strategy was available
        """
        if not needs_live_evidence:
            return EvidenceBundle.static()

        queries = (await self.propose_queries(claim))[: self._max_queries]
        logger.info(f"Running {len(queries)} search queries")

        # gather() keeps submission order regardless of completion order
        outcomes = await asyncio.gather(*(self._search(query) for query in queries))
        available = [outcome for outcome in outcomes if outcome.available]
        if not available:
            logger.warning("Live search unavailable, continuing with static analysis")
            return EvidenceBundle.static()

        records = merge_records(available, self._max_records)
        logger.info(f"Merged {len(records)} evidence records")
        return EvidenceBundle(
            source_mode=available[0].source_mode,
            records=records,
            snippets_text=render_evidence(records),
        )

    async def propose_queries(self, claim: Claim) -> List[str]:
        """Ask the model for search queries, falling back to the claim itself."""
        completion: Optional[LLMCompletion] = None
        try:
            completion = await self._llm.complete(
                QUERY_SYSTEM_PROMPT,
                f'User claim:\n"{claim.text}"',
                LLMRequestOptions(tools=[QUERY_TOOL], tool_choice=QUERY_TOOL.name),
            )
        except PipelineError as e:
            logger.warning(f"Query proposal failed ({e.kind.value}), searching the raw claim")

        queries: List[str] = []
        if completion is not None:
            for arguments in completion.tool_arguments(QUERY_TOOL.name):
                proposed = arguments.get("queries")
                if isinstance(proposed, str):
                    proposed = [proposed]
                if not isinstance(proposed, list):
                    continue
                for query in proposed:
                    if not isinstance(query, str):
                        continue
                    query = query.strip()[:MAX_QUERY_LENGTH]
                    if query and query not in queries:
                        queries.append(query)

        if not queries:
            return [claim.text[:MAX_QUERY_LENGTH]]
        return queries

    async def _search(self, query: str) -> SearchOutcome:
        try:
            return await self._provider.search(query)
        except Exception as e:
            logger.error(f"Search failed for '{query[:80]}': {type(e).__name__}: {e}", exc_info=True)
            return SearchOutcome.unavailable()
