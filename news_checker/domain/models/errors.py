"""Classified failures raised by the verdict pipeline."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of pipeline failure."""

    INVALID_INPUT = "invalid_input"
    CONFIGURATION_MISSING = "configuration_missing"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    UPSTREAM_FAILURE = "upstream_failure"
    MALFORMED_UPSTREAM_RESPONSE = "malformed_upstream_response"
    # Absorbed by their stages, never returned to clients
    EVIDENCE_UNAVAILABLE = "evidence_unavailable"
    VERDICT_PARSE_FAILURE = "verdict_parse_failure"


DEFAULT_MESSAGES = {
    ErrorKind.INVALID_INPUT: "Please provide text to analyze",
    ErrorKind.CONFIGURATION_MISSING: "AI service is not configured",
    ErrorKind.RATE_LIMITED: "Rate limit exceeded. Please try again later.",
    ErrorKind.QUOTA_EXCEEDED: "AI service quota exceeded. Please try again later.",
    ErrorKind.UPSTREAM_FAILURE: "Failed to analyze content",
    ErrorKind.MALFORMED_UPSTREAM_RESPONSE: "Invalid AI response",
    ErrorKind.EVIDENCE_UNAVAILABLE: "Live search is not available",
    ErrorKind.VERDICT_PARSE_FAILURE: "Unable to parse the analysis",
}


class PipelineError(Exception):
    """A classified pipeline failure carrying a user-facing message."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        """HTTP status the failure maps to."""
        return 400 if self.kind == ErrorKind.INVALID_INPUT else 500

    def __repr__(self) -> str:
        return f"PipelineError(kind={self.kind.value!r}, message={self.message!r})"
