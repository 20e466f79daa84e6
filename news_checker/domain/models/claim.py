"""Domain model for the claim submitted for checking."""

from pydantic import BaseModel, Field, field_validator

from .errors import ErrorKind, PipelineError


class Claim(BaseModel):
    """User-submitted text to be fact-checked."""

    text: str = Field(..., description="Claim text, stripped of surrounding whitespace")

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        json_schema_extra = {
            "example": {
                "text": "The Prime Minister resigned this morning.",
            }
        }

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("claim text must not be blank")
        return value

    @classmethod
    def from_input(cls, raw: object) -> "Claim":
        """Build a claim from untrusted request input.

        Raises:
            PipelineError: If the input is not a non-blank string
        """
        if not isinstance(raw, str) or not raw.strip():
            raise PipelineError(ErrorKind.INVALID_INPUT)
        return cls(text=raw)

    def preview(self, length: int = 120) -> str:
        """Short prefix of the claim for log lines."""
        return self.text[:length]
