"""Coerces untrusted verdict candidates into the canonical response."""

import math
from typing import Any, Iterable, List, Optional

from ..models.evidence import SourceMode, SourceRef
from ..models.verdict import CanonicalVerdict, Verdict, VerdictCandidate

DEFAULT_CONFIDENCE = 50
DEFAULT_EXPLANATION = "Analysis complete."

_VERDICTS = {verdict.value: verdict for verdict in Verdict}


def sanitize_verdict(value: Any) -> Verdict:
    if isinstance(value, str) and value in _VERDICTS:
        return _VERDICTS[value]
    return Verdict.UNCERTAIN


def sanitize_confidence(value: Any) -> int:
    """Clamp to [0, 100] and round half up; non-numbers become 50."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    if isinstance(value, float) and math.isnan(value):
        return DEFAULT_CONFIDENCE
    clamped = min(100, max(0, value))
    return int(math.floor(clamped + 0.5))


def sanitize_explanation(value: Any) -> str:
    return value if isinstance(value, str) else DEFAULT_EXPLANATION


def sanitize_red_flags(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [flag for flag in value if isinstance(flag, str)]


def sanitize(
    candidate: VerdictCandidate,
    source_mode: SourceMode = SourceMode.STATIC,
    sources: Optional[Iterable[SourceRef]] = None,
) -> CanonicalVerdict:
    """Build a canonical verdict from any candidate. Never raises."""
    if not isinstance(candidate, dict):
        candidate = {}
    return CanonicalVerdict(
        verdict=sanitize_verdict(candidate.get("verdict")),
        confidence=sanitize_confidence(candidate.get("confidence")),
        explanation=sanitize_explanation(candidate.get("explanation")),
        red_flags=sanitize_red_flags(candidate.get("redFlags")),
        source_mode=source_mode,
        sources=list(sources or []),
    )
