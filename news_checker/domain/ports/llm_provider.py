"""Protocol for language model providers."""

from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from ..models.evidence import EvidenceRecord


class ToolSpec(BaseModel):
    """Function the model may call instead of answering in prose."""

    name: str = Field(..., description="Function name")
    description: str = Field(..., description="What the function is for")
    parameters: Dict[str, Any] = Field(..., description="JSON schema of the arguments")

    def to_payload(self) -> Dict[str, Any]:
        """Chat-completion ``tools`` entry."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolCall(BaseModel):
    """A function invocation issued by the model."""

    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class LLMRequestOptions(BaseModel):
    """Optional request features."""

    tools: List[ToolSpec] = Field(default_factory=list)
    tool_choice: Optional[str] = Field(
        None,
        description='"auto", "required", "none" or the name of a tool to force',
    )
    web_grounding: bool = Field(False, description="Ask the gateway for native search grounding")


class LLMCompletion(BaseModel):
    """Model answer split into text, tool calls and grounding citations."""

    content: str = ""
    tool_calls: List[ToolCall] = Field(default_factory=list)
    citations: List[EvidenceRecord] = Field(default_factory=list)

    def tool_arguments(self, name: str) -> List[Dict[str, Any]]:
        """Arguments of every call to the named tool."""
        return [call.arguments for call in self.tool_calls if call.name == name]


class LLMProvider(Protocol):
    """Protocol defining the interface for language model providers."""

    async def initialize(self) -> None:
        """Initialize the provider."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: Optional[LLMRequestOptions] = None,
    ) -> LLMCompletion:
        """Send a system/user prompt pair and return the model answer.

        Raises:
            PipelineError: On classified upstream failures
        """
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is ready."""
        ...
