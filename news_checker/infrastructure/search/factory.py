"""Factory for building the evidence provider chain from configuration."""

import logging
from typing import Callable, Dict, List, Optional

from ...domain.ports.evidence_provider import EvidenceProvider
from ...domain.ports.llm_provider import LLMProvider
from ..config import AppConfig
from .fallback import FallbackEvidenceProvider, NullEvidenceProvider
from .model_search_adapter import ModelSearchAdapter
from .serpapi_adapter import SerpAPIAdapter, SerpAPIConfig

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[[AppConfig, LLMProvider], Optional[EvidenceProvider]]


def _build_serpapi(config: AppConfig, llm: LLMProvider) -> Optional[EvidenceProvider]:
    if not config.has_search_key:
        logger.warning("SerpAPI strategy configured but SERPAPI_KEY is missing, skipping it")
        return None
    return SerpAPIAdapter(
        SerpAPIConfig(
            api_key=config.serpapi_key,
            url=config.serpapi_url,
            timeout=config.search_timeout,
        )
    )


def _build_model_search(config: AppConfig, llm: LLMProvider) -> Optional[EvidenceProvider]:
    return ModelSearchAdapter(llm, grounded=False)


def _build_model_grounding(config: AppConfig, llm: LLMProvider) -> Optional[EvidenceProvider]:
    return ModelSearchAdapter(llm, grounded=True)


class EvidenceProviderFactory:
    """Factory for creating evidence providers.

    Maintains a registry of search strategies and assembles the configured
    ones into a fallback chain.
    """

    def __init__(self):
        """Initialize the factory."""
        self._provider_registry: Dict[str, ProviderBuilder] = {}

        # Register default strategies
        self.register_provider("serpapi", _build_serpapi)
        self.register_provider("model-search", _build_model_search)
        self.register_provider("model-grounding", _build_model_grounding)

    def register_provider(self, name: str, builder: ProviderBuilder) -> None:
        """Register a new search strategy.

        Args:
            name: Unique identifier for the strategy
            builder: Callable returning a provider, or ``None`` if it cannot run

        Raises:
            ValueError: If the name is already registered
        """
        if name in self._provider_registry:
            raise ValueError(f"Provider {name} already registered")
        self._provider_registry[name] = builder

    def create_provider(self, config: AppConfig, llm: LLMProvider) -> EvidenceProvider:
        """Build the evidence provider for the configured strategies.

        Args:
            config: Application configuration
            llm: Language model client shared with model-backed strategies

        Returns:
            A fallback chain, or a provider that is always unavailable when
            no strategy can be attempted

        Raises:
            ValueError: If a configured strategy is not registered
        """
        providers: List[EvidenceProvider] = []
        for name in config.search_providers:
            if name not in self._provider_registry:
                raise ValueError(f"Provider {name} not registered")
            provider = self._provider_registry[name](config, llm)
            if provider is not None:
                providers.append(provider)

        if not providers:
            logger.warning("No evidence strategy available, live search disabled")
            return NullEvidenceProvider()
        logger.info(f"Evidence strategies: {', '.join(p.provider_name for p in providers)}")
        return FallbackEvidenceProvider(providers)

    @property
    def available_providers(self) -> List[str]:
        """Names of registered strategies."""
        return list(self._provider_registry)
