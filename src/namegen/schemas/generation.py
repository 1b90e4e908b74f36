"""Schemas for generation requests, responses and saved names."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from namegen.core.errors import NameGenError


class GenerationRequest(BaseModel):
    """What gets sent to the AI provider. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    ai_prompt_category: str
    model_identifier: str = Field(min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)


class GenerationResponse(BaseModel):
    """Uniform result of one generation call."""

    success: bool
    names: Optional[list[str]] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    details: list[dict[str, Any]] = Field(default_factory=list)
    model_identifier: Optional[str] = None

    @model_validator(mode="after")
    def check_shape(self) -> "GenerationResponse":
        if self.success:
            if self.names is None or self.error is not None:
                raise ValueError("successful response must carry names and no error")
        else:
            if self.names is not None or not self.error:
                raise ValueError("failed response must carry an error and no names")
        return self

    @classmethod
    def ok(cls, names: list[str], model_identifier: Optional[str] = None) -> "GenerationResponse":
        return cls(success=True, names=list(names), model_identifier=model_identifier)

    @classmethod
    def failure(cls, error: NameGenError) -> "GenerationResponse":
        """Build a failed response from a typed error."""
        details = []
        if hasattr(error, "errors"):
            details = [e.to_dict() for e in error.errors]
        elif hasattr(error, "field"):
            details = [error.to_dict()]
        return cls(
            success=False,
            error=error.message,
            error_code=error.code,
            details=details,
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SavedName(BaseModel):
    """A name a user kept from a generation result."""

    name_text: str
    tool_slug: str
    favorited_at: datetime = Field(default_factory=_utcnow)
