"""Service coordinating the verdict pipeline."""

import logging
from datetime import date
from typing import Optional

from ..models.claim import Claim
from ..models.verdict import CanonicalVerdict
from ..ports.evidence_provider import EvidenceProvider
from ..ports.llm_provider import LLMProvider
from .decision_service import DecisionService
from .evidence_service import EvidenceService
from .sanitizer import sanitize
from .verdict_service import VerdictService

logger = logging.getLogger(__name__)


class FactCheckingService:
    """Runs decision, evidence gathering, verdict and sanitization in order."""

    def __init__(
        self,
        llm: LLMProvider,
        evidence_provider: EvidenceProvider,
        decision: Optional[DecisionService] = None,
        evidence: Optional[EvidenceService] = None,
        verdict: Optional[VerdictService] = None,
    ):
        """Initialize the service.

        Args:
            llm: Language model client shared by every stage
            evidence_provider: Search strategy chain
            decision: Decision stage override
            evidence: Evidence stage override
            verdict: Verdict stage override
        """
        self.decision = decision or DecisionService(llm)
        self.evidence = evidence or EvidenceService(llm, evidence_provider)
        self.verdict = verdict or VerdictService(llm)
        self.evidence_provider = evidence_provider
        logger.info("🔧 FactCheckingService initialized")

    async def analyze(self, claim: Claim, today: Optional[date] = None) -> CanonicalVerdict:
        """Fact check a claim.

        Args:
            claim: Claim to check
            today: Date written into the verdict prompt, defaults to today

        Returns:
            Sanitized verdict

        Raises:
            PipelineError: If the decision or verdict call fails
        """
        logger.info(f"🔍 Starting fact check for claim: {claim.preview()}")

        needs_live_evidence = await self.decision.classify(claim)
        logger.info(f"Live search required: {needs_live_evidence}")

        bundle = await self.evidence.gather(claim, needs_live_evidence)

        candidate = await self.verdict.judge(
            claim,
            bundle.snippets_text or None,
            today or date.today(),
        )

        result = sanitize(candidate, bundle.source_mode, bundle.sources)
        logger.info(
            f"✅ Fact check complete: {result.verdict.value} ({result.confidence}), "
            f"mode={result.source_mode.value}, sources={len(result.sources)}"
        )
        return result
