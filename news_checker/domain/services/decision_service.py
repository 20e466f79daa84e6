"""Decides whether a claim needs live web evidence."""

import logging

from ..models.claim import Claim
from ..ports.llm_provider import LLMProvider

logger = logging.getLogger(__name__)

LIVE_SEARCH_REQUIRED = "LIVE_SEARCH_REQUIRED"
STATIC_ANALYSIS_OK = "STATIC_ANALYSIS_OK"

DECISION_SYSTEM_PROMPT = f"""You are a strict classifier for a fact-checking system.

Task:
Decide whether the user's claim requires LIVE WEB SEARCH to verify.

Rules:
- Output ONLY ONE of these two tokens:
  1) {LIVE_SEARCH_REQUIRED}
  2) {STATIC_ANALYSIS_OK}

Choose {LIVE_SEARCH_REQUIRED} if the claim depends on:
- recent events, breaking news, elections, resignations
- dates, time-sensitive facts, current office holders
- current prices, statistics, reports, or new announcements
- anything that could have changed after your training cutoff

Choose {STATIC_ANALYSIS_OK} if the claim is:
- general knowledge, science, history, definitions
- not time-dependent
- can be verified without needing latest updates"""


class DecisionService:
    """Binary live-search classifier backed by the language model."""

    def __init__(self, llm: LLMProvider):
        self._llm = llm

    async def classify(self, claim: Claim) -> bool:
        """Return True if the claim requires live evidence.

        Anything other than the live-search sentinel, including malformed
        output, selects static analysis. Provider errors propagate.
        """
        completion = await self._llm.complete(
            DECISION_SYSTEM_PROMPT,
            f'User claim:\n"{claim.text}"',
        )
        decision = completion.content.strip()
        logger.info(f"Decision output: {decision[:80]}")
        return LIVE_SEARCH_REQUIRED in decision
