"""Dependency injection configuration for hexagonal architecture."""

import asyncio
import logging
from functools import lru_cache
from typing import Dict, List, Optional

from ..domain.ports.evidence_provider import EvidenceProvider
from ..domain.ports.llm_provider import LLMProvider
from ..domain.services.fact_checking_service import FactCheckingService
from .ai.gateway_adapter import GatewayAdapter, GatewayConfig
from .config import AppConfig
from .search.factory import EvidenceProviderFactory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection.

    The configuration is read once; providers are created on first use so a
    missing gateway key is reported per request instead of at import time.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        search_factory: Optional[EvidenceProviderFactory] = None,
        fact_checking_service: Optional[FactCheckingService] = None,
    ):
        """Initialize service container.

        Args:
            config: Configuration, read from the environment when omitted
            search_factory: Evidence strategy registry
            fact_checking_service: Prebuilt service, skips provider setup
        """
        self.config = config or AppConfig.from_env()
        self._search_factory = search_factory or EvidenceProviderFactory()
        self._llm: Optional[LLMProvider] = None
        self._evidence_provider: Optional[EvidenceProvider] = None
        self._fact_checking_service = fact_checking_service
        if fact_checking_service is not None:
            self._evidence_provider = fact_checking_service.evidence_provider
        self._lock = asyncio.Lock()

    async def _setup_providers(self) -> None:
        """Create the gateway client and the evidence strategy chain."""
        logger.info("🤖 Setting up LLM provider...")
        llm = GatewayAdapter(
            GatewayConfig(
                api_key=self.config.require_llm_key(),
                base_url=self.config.llm_base_url,
                model=self.config.llm_model,
                timeout=self.config.llm_timeout,
            )
        )
        await llm.initialize()

        logger.info("🔎 Setting up evidence providers...")
        evidence_provider = self._search_factory.create_provider(self.config, llm)
        await evidence_provider.initialize()

        self._llm = llm
        self._evidence_provider = evidence_provider
        logger.info("✅ Providers ready")

    async def get_fact_checking_service(self) -> FactCheckingService:
        """Get fact checking service with providers.

        Raises:
            PipelineError: If the gateway key is not configured
        """
        async with self._lock:
            if self._fact_checking_service is None:
                await self._setup_providers()
                self._fact_checking_service = FactCheckingService(self._llm, self._evidence_provider)
        return self._fact_checking_service

    @property
    def status(self) -> Dict[str, object]:
        """Configuration and provider readiness for health checks."""
        strategies: List[str] = []
        if self._evidence_provider is not None:
            strategies = self._evidence_provider.provider_name.split(" > ")
        return {
            "llm_configured": bool(self.config.llm_api_key),
            "llm_ready": self._llm is not None and self._llm.is_available,
            "search_key_configured": self.config.has_search_key,
            "configured_strategies": list(self.config.search_providers),
            "active_strategies": strategies,
        }

    async def shutdown(self) -> None:
        """Close provider clients."""
        if self._evidence_provider is not None:
            await self._evidence_provider.shutdown()
        if self._llm is not None:
            await self._llm.shutdown()
        self._evidence_provider = None
        self._llm = None
        self._fact_checking_service = None


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


async def get_fact_checking_service() -> FactCheckingService:
    """FastAPI dependency for fact checking service."""
    container = get_service_container()
    return await container.get_fact_checking_service()
