"""Process configuration loaded from the environment."""

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from ..domain.models.errors import ErrorKind, PipelineError

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PROVIDERS = ["serpapi"]


class AppConfig(BaseModel):
    """Credentials and upstream settings for the verdict pipeline."""

    llm_api_key: str = Field(default="", description="Language model gateway key")
    llm_base_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1",
        description="Chat-completion gateway base URL",
    )
    llm_model: str = Field(default="google/gemini-3-flash-preview", description="Model identifier")
    llm_timeout: float = Field(default=30.0, description="Gateway timeout in seconds")
    serpapi_key: Optional[str] = Field(default=None, description="SerpAPI key, optional")
    serpapi_url: str = Field(default="https://serpapi.com/search.json", description="SerpAPI endpoint")
    search_timeout: float = Field(default=15.0, description="Search timeout in seconds")
    search_providers: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SEARCH_PROVIDERS),
        description="Evidence strategies in fallback order",
    )

    @field_validator("search_providers", mode="before")
    @classmethod
    def _split_providers(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        return [name.strip().lower() for name in value if name and name.strip()]

    @property
    def has_search_key(self) -> bool:
        return bool(self.serpapi_key)

    def require_llm_key(self) -> str:
        """Return the gateway key.

        Raises:
            PipelineError: If the key is not configured
        """
        if not self.llm_api_key:
            logger.error("LOVABLE_API_KEY is not configured")
            raise PipelineError(ErrorKind.CONFIGURATION_MISSING)
        return self.llm_api_key

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "AppConfig":
        """Build the configuration from environment variables.

        Args:
            load_dotenv_file: Whether to read a ``.env`` file first
        """
        if load_dotenv_file:
            load_dotenv()

        values = {
            "llm_api_key": os.getenv("LOVABLE_API_KEY", ""),
            "serpapi_key": os.getenv("SERPAPI_KEY") or None,
        }
        optional = {
            "llm_base_url": "LLM_BASE_URL",
            "llm_model": "LLM_MODEL",
            "llm_timeout": "LLM_TIMEOUT",
            "serpapi_url": "SERPAPI_URL",
            "search_timeout": "SEARCH_TIMEOUT",
            "search_providers": "SEARCH_PROVIDERS",
        }
        for field, env_name in optional.items():
            if env_value := os.getenv(env_name):
                values[field] = env_value

        config = cls(**values)
        if not config.has_search_key:
            logger.warning("SERPAPI_KEY not found in environment variables")
        return config
