"""Schemas for tool definitions and the AI models they can use."""

import re
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from namegen.schemas.fields import FieldSchema


def slugify(name: str) -> str:
    """
    Generate a URL-friendly slug from a name.

    Args:
        name: Display name, e.g. "Cat Name Generator!"

    Returns:
        Slug, e.g. "cat-name-generator"
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def _unique_strings(v) -> list[str]:
    if v is None:
        return []
    if isinstance(v, str):
        v = [v]
    seen: list[str] = []
    for item in v:
        item = str(item)
        if item not in seen:
            seen.append(item)
    return seen


class AIModel(BaseModel):
    """An AI model configuration an administrator has registered."""

    model_identifier: str = Field(description="Stable key, e.g. 'anthropic/claude-3.5-sonnet'")
    display_name: str = Field(default="")
    provider_name: str = Field(default="openrouter")
    capabilities_tags: set[str] = Field(default_factory=set)
    is_active: bool = Field(default=True)

    @field_validator("capabilities_tags", mode="before")
    @classmethod
    def normalize_tags(cls, v) -> set[str]:
        """Normalize tags to a set of strings."""
        if v is None:
            return set()
        if isinstance(v, str):
            return {v}
        return {str(item) for item in v}

    @model_validator(mode="after")
    def default_display_name(self) -> "AIModel":
        if not self.display_name:
            self.display_name = self.model_identifier
        return self

    def __hash__(self) -> int:
        return hash(self.model_identifier)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AIModel):
            return NotImplemented
        return self.model_identifier == other.model_identifier


class ToolDefinition(BaseModel):
    """A published name generator: its form schema plus AI configuration."""

    id: str = Field(default="")
    slug: str = Field(default="")
    name: str = Field(description="Display name of the tool")
    description: Optional[str] = Field(default=None)
    ai_prompt_category: str = Field(
        description="Opaque key selecting the provider-side prompt template"
    )
    default_ai_model_identifier: Optional[str] = Field(default=None)
    available_ai_model_identifiers: list[str] = Field(
        default_factory=list,
        description="Allow-list of model identifiers, order preserved, no duplicates",
    )
    default_parameters: dict[str, Any] = Field(default_factory=dict)
    configurable_fields: list[FieldSchema] = Field(default_factory=list)
    is_published: bool = Field(default=True)

    @field_validator("available_ai_model_identifiers", mode="before")
    @classmethod
    def normalize_available_models(cls, v) -> list[str]:
        """Normalize the allow-list to unique strings."""
        return _unique_strings(v)

    @field_validator("default_ai_model_identifier", mode="before")
    @classmethod
    def normalize_default_model(cls, v) -> Optional[str]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return str(v)

    @field_validator("default_parameters", mode="before")
    @classmethod
    def normalize_default_parameters(cls, v) -> dict[str, Any]:
        if v is None:
            return {}
        return v

    @model_validator(mode="after")
    def fill_identity(self) -> "ToolDefinition":
        if not self.slug:
            self.slug = slugify(self.name)
        if not self.id:
            self.id = self.slug
        return self

    def field(self, name: str) -> Optional[FieldSchema]:
        for schema in self.configurable_fields:
            if schema.name == name:
                return schema
        return None

    def field_names(self) -> list[str]:
        return [schema.name for schema in self.configurable_fields]
