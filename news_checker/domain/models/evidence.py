"""Domain models for search evidence."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SourceMode(str, Enum):
    """Which evidence path produced a verdict."""

    STATIC = "static"  # General knowledge only
    LIVE_WEB = "live-web"  # Search API results or model-listed results
    GROUNDED = "grounded"  # Provider-attached grounding citations


class EvidenceRecord(BaseModel):
    """A single search result."""

    title: str = Field(..., description="Result title")
    url: str = Field(..., description="Result URL, unique within a request")
    snippet: str = Field(default="", description="Result excerpt")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class SourceRef(BaseModel):
    """Source reference attached to the final verdict."""

    title: str
    url: str


class SearchOutcome(BaseModel):
    """Result of one evidence provider search.

    ``source_mode`` is ``None`` when no search strategy could be attempted.
    """

    records: List[EvidenceRecord] = Field(default_factory=list)
    source_mode: Optional[SourceMode] = None

    @property
    def available(self) -> bool:
        """Whether any strategy produced this outcome."""
        return self.source_mode is not None

    @classmethod
    def unavailable(cls) -> "SearchOutcome":
        """Outcome signalling that no strategy could run."""
        return cls(records=[], source_mode=None)


class EvidenceBundle(BaseModel):
    """Evidence gathered for one claim, ready for prompt embedding."""

    source_mode: SourceMode = SourceMode.STATIC
    records: List[EvidenceRecord] = Field(default_factory=list)
    snippets_text: str = ""

    @property
    def sources(self) -> List[SourceRef]:
        """Title/URL pairs for the response."""
        return [SourceRef(title=record.title, url=record.url) for record in self.records]

    @property
    def has_evidence(self) -> bool:
        return bool(self.snippets_text)

    @classmethod
    def static(cls) -> "EvidenceBundle":
        return cls(source_mode=SourceMode.STATIC)
