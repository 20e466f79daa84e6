"""Tests for environment configuration."""

import pytest

from news_checker.domain.models.errors import ErrorKind, PipelineError
from news_checker.infrastructure.config import AppConfig

ENV_VARS = (
    "LOVABLE_API_KEY",
    "LLM_BASE_URL",
    "LLM_MODEL",
    "LLM_TIMEOUT",
    "SERPAPI_KEY",
    "SERPAPI_URL",
    "SEARCH_TIMEOUT",
    "SEARCH_PROVIDERS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = AppConfig.from_env(load_dotenv_file=False)

    assert config.llm_api_key == ""
    assert config.serpapi_key is None
    assert not config.has_search_key
    assert config.search_providers == ["serpapi"]
    assert config.llm_base_url == "https://ai.gateway.lovable.dev/v1"


def test_values_from_env(clean_env):
    clean_env.setenv("LOVABLE_API_KEY", "llm-key")
    clean_env.setenv("SERPAPI_KEY", "serp-key")
    clean_env.setenv("LLM_MODEL", "test/model")
    clean_env.setenv("LLM_TIMEOUT", "12.5")
    clean_env.setenv("SEARCH_PROVIDERS", "SerpAPI, model-search,,")

    config = AppConfig.from_env(load_dotenv_file=False)

    assert config.require_llm_key() == "llm-key"
    assert config.serpapi_key == "serp-key"
    assert config.has_search_key
    assert config.llm_model == "test/model"
    assert config.llm_timeout == 12.5
    assert config.search_providers == ["serpapi", "model-search"]


def test_empty_search_key_counts_as_missing(clean_env):
    clean_env.setenv("SERPAPI_KEY", "")
    assert AppConfig.from_env(load_dotenv_file=False).serpapi_key is None


def test_missing_llm_key(clean_env):
    config = AppConfig.from_env(load_dotenv_file=False)
    with pytest.raises(PipelineError) as exc_info:
        config.require_llm_key()
    assert exc_info.value.kind == ErrorKind.CONFIGURATION_MISSING
    assert exc_info.value.status_code == 500
