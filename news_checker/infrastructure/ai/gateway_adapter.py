"""Chat-completion gateway implementation of the LLM provider interface."""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from ...domain.models.errors import ErrorKind, PipelineError
from ...domain.models.evidence import EvidenceRecord
from ...domain.ports.llm_provider import LLMCompletion, LLMProvider, LLMRequestOptions, ToolCall

logger = logging.getLogger(__name__)

_STATUS_KINDS = {
    429: ErrorKind.RATE_LIMITED,
    402: ErrorKind.QUOTA_EXCEEDED,
}

_TOOL_CHOICE_KEYWORDS = {"auto", "required", "none"}


class GatewayConfig(BaseModel):
    """Configuration for the gateway adapter."""

    api_key: str = Field(..., description="Gateway bearer token")
    base_url: str = Field(default="https://ai.gateway.lovable.dev/v1", description="API base URL")
    model: str = Field(default="google/gemini-3-flash-preview", description="Model to use")
    timeout: float = Field(default=30.0, description="API timeout in seconds")


class GatewayAdapter(LLMProvider):
    """Calls an OpenAI-compatible chat-completion gateway."""

    def __init__(self, config: GatewayConfig):
        """Initialize the adapter.

        Raises:
            PipelineError: If no API key is configured
        """
        if not config.api_key:
            raise PipelineError(ErrorKind.CONFIGURATION_MISSING)
        self._config = config
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={
                    "Authorization": f"Bearer {self._config.api_key}",
                    "Content-Type": "application/json",
                },
            )

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: Optional[LLMRequestOptions] = None,
    ) -> LLMCompletion:
        """Send one chat-completion request.

        Args:
            system_prompt: System message
            user_prompt: User message
            options: Tool and grounding options

        Returns:
            Text content, tool calls and grounding citations

        Raises:
            PipelineError: On upstream or response failures
            ValueError: If a prompt is empty
        """
        if not system_prompt or not user_prompt:
            raise ValueError("Both system and user prompts are required")
        if not self._client:
            raise RuntimeError("Provider not initialized")

        payload = self._build_payload(system_prompt, user_prompt, options)

        try:
            response = await self._client.post("/chat/completions", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Gateway request failed: {type(e).__name__}: {e}")
            raise PipelineError(ErrorKind.UPSTREAM_FAILURE) from e

        if not response.is_success:
            logger.error(f"Gateway error: {response.status_code} {response.text[:500]}")
            raise PipelineError(_STATUS_KINDS.get(response.status_code, ErrorKind.UPSTREAM_FAILURE))

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Gateway returned non-JSON body: {response.text[:500]}")
            raise PipelineError(ErrorKind.MALFORMED_UPSTREAM_RESPONSE) from e

        return self._parse_completion(data)

    def _build_payload(
        self,
        system_prompt: str,
        user_prompt: str,
        options: Optional[LLMRequestOptions],
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if options is None:
            return payload

        if options.tools:
            payload["tools"] = [tool.to_payload() for tool in options.tools]
        if options.tool_choice:
            if options.tool_choice in _TOOL_CHOICE_KEYWORDS:
                payload["tool_choice"] = options.tool_choice
            else:
                payload["tool_choice"] = {
                    "type": "function",
                    "function": {"name": options.tool_choice},
                }
        if options.web_grounding:
            payload["web_search_options"] = {}
        return payload

    def _parse_completion(self, data: Any) -> LLMCompletion:
        try:
            choice = data["choices"][0]
            message = choice["message"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"No message in gateway response: {str(data)[:500]}")
            raise PipelineError(ErrorKind.MALFORMED_UPSTREAM_RESPONSE) from e
        if not isinstance(message, dict):
            raise PipelineError(ErrorKind.MALFORMED_UPSTREAM_RESPONSE)

        content = message.get("content")
        if isinstance(content, list):
            # Content-part arrays
            content = "".join(
                part["text"]
                for part in content
                if isinstance(part, dict) and isinstance(part.get("text"), str)
            )
        if not isinstance(content, str):
            content = ""

        tool_calls = self._parse_tool_calls(message.get("tool_calls"))
        if not content.strip() and not tool_calls:
            logger.error(f"No content in gateway response: {str(data)[:500]}")
            raise PipelineError(ErrorKind.MALFORMED_UPSTREAM_RESPONSE)

        return LLMCompletion(
            content=content,
            tool_calls=tool_calls,
            citations=self._parse_citations(data, choice, message),
        )

    @staticmethod
    def _parse_tool_calls(raw_calls: Any) -> List[ToolCall]:
        if not isinstance(raw_calls, list):
            return []

        calls = []
        for raw in raw_calls:
            function = raw.get("function") if isinstance(raw, dict) else None
            if not isinstance(function, dict) or not function.get("name"):
                continue
            arguments = function.get("arguments")
            if isinstance(arguments, str):
                try:
                    arguments = json.loads(arguments)
                except ValueError:
                    logger.warning(f"Unparsable tool arguments for {function['name']}")
                    arguments = {}
            if not isinstance(arguments, dict):
                arguments = {}
            calls.append(ToolCall(name=function["name"], arguments=arguments))
        return calls

    @staticmethod
    def _parse_citations(data: Any, choice: Any, message: Dict[str, Any]) -> List[EvidenceRecord]:
        """Collect grounding chunks and URL annotations, deduplicated by URL."""
        records: List[EvidenceRecord] = []
        seen = set()

        def add(title: Any, url: Any) -> None:
            if not isinstance(url, str) or not url or url in seen:
                return
            seen.add(url)
            records.append(
                EvidenceRecord(
                    title=title if isinstance(title, str) and title else "Untitled",
                    url=url,
                )
            )

        for holder in (message, choice, data):
            if not isinstance(holder, dict):
                continue
            metadata = holder.get("grounding_metadata") or holder.get("groundingMetadata")
            if not isinstance(metadata, dict):
                continue
            chunks = metadata.get("grounding_chunks") or metadata.get("groundingChunks") or []
            for chunk in chunks if isinstance(chunks, list) else []:
                web = chunk.get("web") if isinstance(chunk, dict) else None
                if isinstance(web, dict):
                    add(web.get("title"), web.get("uri"))

        annotations = message.get("annotations")
        for annotation in annotations if isinstance(annotations, list) else []:
            if isinstance(annotation, dict) and annotation.get("type") == "url_citation":
                citation = annotation.get("url_citation") or {}
                if isinstance(citation, dict):
                    add(citation.get("title"), citation.get("url"))

        return records

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def provider_name(self) -> str:
        """Get the name of the LLM provider."""
        return "Gateway"

    @property
    def is_available(self) -> bool:
        """Check if the provider is ready."""
        return self._client is not None
