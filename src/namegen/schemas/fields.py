"""Schema for a tool's configurable input fields."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

FieldType = Literal["text", "number", "select", "textarea", "switch", "list"]

FIELD_TYPES: tuple[str, ...] = ("text", "number", "select", "textarea", "switch", "list")


class FieldSchema(BaseModel):
    """Declarative description of one input a tool's generation form exposes."""

    name: str = Field(description="Key of the field, unique within one tool")
    label: str = Field(default="", description="Human readable label")
    type: FieldType = Field(description="Input type, selects the validation rules")
    default: Optional[Any] = Field(
        default=None,
        description="Value used when the caller supplies nothing (trusted, not validated)",
    )
    options: Optional[list[str]] = Field(
        default=None,
        description="Allowed values for select fields",
    )
    min: Optional[float] = Field(default=None, description="Lower bound for number fields")
    max: Optional[float] = Field(default=None, description="Upper bound for number fields")
    required: bool = Field(default=False)
    placeholder: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)

    @field_validator("label", mode="before")
    @classmethod
    def normalize_label(cls, v) -> str:
        """Normalize label to string."""
        if v is None:
            return ""
        return str(v)

    @field_validator("options", mode="before")
    @classmethod
    def normalize_options(cls, v) -> Optional[list[str]]:
        """Normalize options to list of strings."""
        if v is None:
            return None
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple)):
            return [str(item) if not isinstance(item, str) else item for item in v]
        return v

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set and self.default is not None

    @property
    def display_label(self) -> str:
        return self.label or self.name
