"""Asks the language model for a credibility verdict."""

import logging
from datetime import date
from typing import Optional

from ..models.claim import Claim
from ..models.verdict import VerdictCandidate, default_candidate
from ..ports.llm_provider import LLMProvider
from .response_parsing import parse_json_payload

logger = logging.getLogger(__name__)

VERDICT_SYSTEM_PROMPT = """You are an expert fact-checker and misinformation analyst.
Today's date is {today}. Treat anything after your training data as unknown unless evidence below states it.

Your job:
Analyze the user's news content and return a credibility verdict.

If live web evidence is provided, you MUST ground your verdict only on it.
If evidence is missing, insufficient or conflicting, return "uncertain".
Never invent sources, quotes, dates or numbers.

You MUST respond with valid JSON exactly in this format and nothing else:
{{
  "verdict": "real" | "fake" | "uncertain",
  "confidence": <number 0-100>,
  "explanation": "<clear explanation>",
  "redFlags": ["<flag1>", "<flag2>"]
}}"""

EVIDENCE_USER_PROMPT = """User claim:
"{claim}"

Live web evidence (top results):
{evidence}

Rules:
1) Base verdict ONLY on evidence above.
2) If evidence is insufficient/conflicting -> "uncertain".
3) Never guess.
4) Keep explanation clear."""

STATIC_USER_PROMPT = """Analyze this news content for credibility using your general knowledge:

"{claim}\""""


def parse_candidate(content: str) -> VerdictCandidate:
    """Parse the model answer into an untrusted candidate.

    Fenced or bare JSON objects are accepted; anything else yields the
    default uncertain candidate.
    """
    payload = parse_json_payload(content)
    if not isinstance(payload, dict):
        logger.error(f"Failed to parse verdict JSON: {str(content)[:200]}")
        return default_candidate()
    return payload


class VerdictService:
    """Builds the verdict prompt and parses the answer."""

    def __init__(self, llm: LLMProvider):
        self._llm = llm

    async def judge(
        self,
        claim: Claim,
        evidence_text: Optional[str] = None,
        today: Optional[date] = None,
    ) -> VerdictCandidate:
        """Request a verdict for the claim.

        Args:
            claim: Claim being checked
            evidence_text: Rendered evidence block, if any
            today: Current date written into the prompt

        Returns:
            Untrusted verdict candidate

        Raises:
            PipelineError: If the language model call fails
        """
        today = today or date.today()
        system_prompt = VERDICT_SYSTEM_PROMPT.format(today=today.isoformat())
        if evidence_text:
            user_prompt = EVIDENCE_USER_PROMPT.format(claim=claim.text, evidence=evidence_text)
        else:
            user_prompt = STATIC_USER_PROMPT.format(claim=claim.text)

        completion = await self._llm.complete(system_prompt, user_prompt)
        logger.info(f"Verdict response: {completion.content[:200]}")
        return parse_candidate(completion.content)
