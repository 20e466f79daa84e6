"""Tests for the evidence provider factory and fallback chain."""

import pytest

from news_checker.domain.models.evidence import SourceMode
from news_checker.infrastructure.config import AppConfig
from news_checker.infrastructure.search.factory import EvidenceProviderFactory
from news_checker.infrastructure.search.fallback import FallbackEvidenceProvider, NullEvidenceProvider
from news_checker.infrastructure.search.model_search_adapter import ModelSearchAdapter
from news_checker.infrastructure.search.serpapi_adapter import SerpAPIAdapter, SerpAPIConfig

from conftest import ScriptedLLM, StaticEvidenceProvider, live, records


@pytest.fixture
def search_factory() -> EvidenceProviderFactory:
    return EvidenceProviderFactory()


def test_serpapi_with_key(search_factory):
    config = AppConfig(llm_api_key="k", serpapi_key="serp")
    provider = search_factory.create_provider(config, ScriptedLLM())

    assert isinstance(provider, FallbackEvidenceProvider)
    assert [type(p) for p in provider.providers] == [SerpAPIAdapter]


def test_serpapi_without_key_disables_search(search_factory):
    """The default strategy without its key leaves nothing to attempt."""
    config = AppConfig(llm_api_key="k")
    provider = search_factory.create_provider(config, ScriptedLLM())

    assert isinstance(provider, NullEvidenceProvider)


def test_model_fallback_without_key(search_factory):
    config = AppConfig(llm_api_key="k", search_providers="serpapi, model-search")
    provider = search_factory.create_provider(config, ScriptedLLM())

    assert [p.provider_name for p in provider.providers] == ["model-search"]


def test_full_chain_order(search_factory):
    config = AppConfig(
        llm_api_key="k",
        serpapi_key="serp",
        search_providers=["model-grounding", "serpapi", "model-search"],
    )
    provider = search_factory.create_provider(config, ScriptedLLM())

    assert provider.provider_name == "model-grounding > serpapi > model-search"
    assert isinstance(provider.providers[0], ModelSearchAdapter)


def test_unknown_strategy(search_factory):
    config = AppConfig(llm_api_key="k", search_providers=["bing"])
    with pytest.raises(ValueError):
        search_factory.create_provider(config, ScriptedLLM())


def test_duplicate_registration(search_factory):
    with pytest.raises(ValueError):
        search_factory.register_provider("serpapi", lambda config, llm: None)


def test_custom_strategy(search_factory):
    custom = StaticEvidenceProvider()
    search_factory.register_provider("custom", lambda config, llm: custom)
    provider = search_factory.create_provider(AppConfig(search_providers="custom"), ScriptedLLM())

    assert provider.providers == [custom]
    assert "custom" in search_factory.available_providers


@pytest.mark.asyncio
async def test_fallback_uses_next_strategy_when_unavailable():
    primary = StaticEvidenceProvider()
    fallback = StaticEvidenceProvider(default=live(records("fb", 2)))
    chain = FallbackEvidenceProvider([primary, fallback])

    outcome = await chain.search("query")

    assert outcome.source_mode == SourceMode.LIVE_WEB
    assert len(outcome.records) == 2
    assert primary.queries == ["query"]
    assert fallback.queries == ["query"]


@pytest.mark.asyncio
async def test_raising_strategy_falls_through():
    """An uninitialized adapter raises; the next strategy still answers."""
    primary = SerpAPIAdapter(SerpAPIConfig(api_key="serp"))
    fallback = StaticEvidenceProvider(default=live(records("fb", 2)))
    chain = FallbackEvidenceProvider([primary, fallback])

    outcome = await chain.search("query")

    assert outcome.available
    assert len(outcome.records) == 2
    assert fallback.queries == ["query"]


@pytest.mark.asyncio
async def test_empty_primary_result_stops_chain():
    """No results is an answer, so the fallback is not consulted."""
    primary = StaticEvidenceProvider(default=live([]))
    fallback = StaticEvidenceProvider(default=live(records("fb", 2)))
    chain = FallbackEvidenceProvider([primary, fallback])

    outcome = await chain.search("query")

    assert outcome.available
    assert outcome.records == []
    assert fallback.queries == []


@pytest.mark.asyncio
async def test_all_unavailable():
    chain = FallbackEvidenceProvider([StaticEvidenceProvider(), StaticEvidenceProvider()])
    assert not (await chain.search("query")).available
    assert not (await NullEvidenceProvider().search("query")).available


def test_empty_chain_rejected():
    with pytest.raises(ValueError):
        FallbackEvidenceProvider([])
