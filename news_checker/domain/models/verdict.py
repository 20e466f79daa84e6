"""Domain models for credibility verdicts."""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .evidence import SourceMode, SourceRef

# Raw, untrusted verdict proposed by the language model
VerdictCandidate = Dict[str, Any]

UNPARSED_EXPLANATION = "Unable to fully analyze this content. Please try again."


class Verdict(str, Enum):
    """Possible credibility outcomes."""

    REAL = "real"
    FAKE = "fake"
    UNCERTAIN = "uncertain"


def default_candidate() -> VerdictCandidate:
    """Candidate used when the model response cannot be parsed."""
    return {
        "verdict": Verdict.UNCERTAIN.value,
        "confidence": 50,
        "explanation": UNPARSED_EXPLANATION,
        "redFlags": [],
    }


class CanonicalVerdict(BaseModel):
    """Sanitized verdict returned to clients."""

    verdict: Verdict = Field(..., description="Credibility verdict")
    confidence: int = Field(..., ge=0, le=100, description="Confidence from 0 to 100")
    explanation: str = Field(..., description="Explanation of the verdict")
    red_flags: List[str] = Field(default_factory=list, alias="redFlags")
    source_mode: SourceMode = Field(default=SourceMode.STATIC, alias="sourceMode")
    sources: List[SourceRef] = Field(default_factory=list)

    class Config:
        """Pydantic model configuration."""
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "verdict": "fake",
                "confidence": 85,
                "explanation": "No reputable outlet reports this resignation.",
                "redFlags": ["No named sources", "Sensational wording"],
                "sourceMode": "live-web",
                "sources": [{"title": "Reuters", "url": "https://www.reuters.com/"}],
            }
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape of the API response."""
        return self.model_dump(mode="json", by_alias=True)
