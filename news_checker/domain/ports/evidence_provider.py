"""Protocol for web evidence providers."""

from typing import Protocol

from ..models.evidence import SearchOutcome


class EvidenceProvider(Protocol):
    """Protocol for web search strategies.

    Implementations never raise for an empty result set and report
    ``SearchOutcome.unavailable()`` when the search could not be attempted.
    """

    async def initialize(self) -> None:
        """Initialize the provider."""
        ...

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        ...

    async def search(self, query: str) -> SearchOutcome:
        """Search the web for the query."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...
