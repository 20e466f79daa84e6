"""SerpAPI implementation of the evidence provider interface."""

import logging
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, Field

from ...domain.models.evidence import EvidenceRecord, SearchOutcome, SourceMode
from ...domain.ports.evidence_provider import EvidenceProvider

logger = logging.getLogger(__name__)


class SerpAPIConfig(BaseModel):
    """Configuration for SerpAPI adapter."""

    api_key: str = Field(..., description="SerpAPI key")
    url: str = Field(default="https://serpapi.com/search.json", description="Search endpoint")
    timeout: float = Field(default=15.0, description="Request timeout in seconds")
    max_results: int = Field(default=5, description="Organic results kept per query")


class SerpAPIAdapter(EvidenceProvider):
    """Keyed web search through SerpAPI organic results."""

    def __init__(self, config: SerpAPIConfig, provider_name: str = "serpapi"):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            provider_name: Name of the provider
        """
        self._config = config
        self._name = provider_name
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout)

    async def search(self, query: str) -> SearchOutcome:
        """Search SerpAPI and map the top organic results.

        Failed requests are reported as unavailable so callers can fall back.
        """
        if not self._client:
            raise RuntimeError("Provider not initialized")

        try:
            response = await self._client.get(
                self._config.url,
                params={"q": query, "api_key": self._config.api_key},
            )
        except httpx.HTTPError as e:
            logger.error(f"SerpAPI request failed: {type(e).__name__}: {e}")
            return SearchOutcome.unavailable()

        if not response.is_success:
            logger.error(f"SerpAPI error: {response.status_code} {response.text[:500]}")
            return SearchOutcome.unavailable()

        try:
            data = response.json()
        except ValueError:
            logger.error("SerpAPI returned a non-JSON body")
            return SearchOutcome.unavailable()

        records = self._map_results(data)
        logger.info(f"SerpAPI returned {len(records)} results for: {query[:80]}")
        return SearchOutcome(records=records, source_mode=SourceMode.LIVE_WEB)

    def _map_results(self, data: Any) -> List[EvidenceRecord]:
        organic = data.get("organic_results") if isinstance(data, dict) else None
        if not isinstance(organic, list):
            return []

        records = []
        for result in organic[: self._config.max_results]:
            if not isinstance(result, dict):
                continue
            link = result.get("link")
            if not isinstance(link, str) or not link:
                continue
            title = result.get("title")
            snippet = result.get("snippet")
            records.append(
                EvidenceRecord(
                    title=title if isinstance(title, str) and title else "Untitled",
                    url=link,
                    snippet=snippet if isinstance(snippet, str) else "",
                )
            )
        return records

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return self._name
