"""Composite evidence providers."""

import logging
from typing import List, Sequence

from ...domain.models.evidence import SearchOutcome
from ...domain.ports.evidence_provider import EvidenceProvider

logger = logging.getLogger(__name__)


class FallbackEvidenceProvider(EvidenceProvider):
    """Tries strategies in order until one is available.

    An available but empty outcome stops the chain: no results is an
    answer, not a failure.
    """

    def __init__(self, providers: Sequence[EvidenceProvider]):
        if not providers:
            raise ValueError("At least one evidence provider is required")
        self._providers: List[EvidenceProvider] = list(providers)

    async def initialize(self) -> None:
        for provider in self._providers:
            await provider.initialize()

    async def search(self, query: str) -> SearchOutcome:
        for provider in self._providers:
            try:
                outcome = await provider.search(query)
            except Exception as e:
                logger.error(
                    f"Evidence provider {provider.provider_name} failed: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                outcome = SearchOutcome.unavailable()
            if outcome.available:
                return outcome
            logger.warning(f"Evidence provider {provider.provider_name} unavailable, trying next")
        return SearchOutcome.unavailable()

    async def shutdown(self) -> None:
        for provider in self._providers:
            await provider.shutdown()

    @property
    def providers(self) -> List[EvidenceProvider]:
        return list(self._providers)

    @property
    def provider_name(self) -> str:
        return " > ".join(provider.provider_name for provider in self._providers)


class NullEvidenceProvider(EvidenceProvider):
    """Used when no search strategy is configured."""

    async def initialize(self) -> None:
        pass

    async def search(self, query: str) -> SearchOutcome:
        return SearchOutcome.unavailable()

    async def shutdown(self) -> None:
        pass

    @property
    def provider_name(self) -> str:
        return "none"
