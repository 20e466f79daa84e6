"""Helpers for pulling JSON out of free-form model output.

Nothing in this module raises on bad input: callers get ``None`` or an
empty list and pick their own default.
"""

import json
import re
from typing import Any, List, Optional

_FENCE_RE = re.compile(r"```[ \t]*(?:[A-Za-z0-9_+-]+)?[ \t]*\r?\n?([\s\S]*?)```")


def strip_code_fence(text: str) -> str:
    """Return the body of the first fenced block, or the stripped text."""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_json_payload(text: Any) -> Optional[Any]:
    """Parse optionally fenced JSON, returning ``None`` on failure."""
    if not isinstance(text, str):
        return None
    try:
        return json.loads(strip_code_fence(text))
    except (ValueError, RecursionError):
        return None


def extract_json_array(text: Any) -> List[Any]:
    """Best-effort extraction of a JSON array embedded in prose."""
    payload = parse_json_payload(text)
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("results", "items", "sources"):
            if isinstance(payload.get(key), list):
                return payload[key]
        return []
    if not isinstance(text, str):
        return []

    start, end = text.find("["), text.rfind("]")
    if start == -1 or end <= start:
        return []
    try:
        payload = json.loads(text[start : end + 1])
    except (ValueError, RecursionError):
        return []
    return payload if isinstance(payload, list) else []
