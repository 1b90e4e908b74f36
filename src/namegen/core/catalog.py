"""Read-only catalog of tools and AI models."""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Protocol

import yaml
from pydantic import ValidationError

from namegen.core.errors import CatalogError, ToolNotFound
from namegen.core.logging import get_logger
from namegen.schemas.tool import AIModel, ToolDefinition

logger = get_logger("namegen.catalog")


class ToolSource(Protocol):
    """Lookups the generation pipeline needs. Implementations are read-only."""

    def get_tool(self, slug: str) -> ToolDefinition:
        ...

    def list_active_models(self, identifiers: Optional[Iterable[str]] = None) -> set[AIModel]:
        ...


class ToolCatalog:
    """In-memory snapshot of tools and models, optionally loaded from a YAML/JSON file."""

    def __init__(
        self,
        tools: Optional[Iterable[ToolDefinition]] = None,
        models: Optional[Iterable[AIModel]] = None,
    ):
        self._tools: dict[str, ToolDefinition] = {}
        self._models: dict[str, AIModel] = {}
        for tool in tools or []:
            if tool.slug in self._tools:
                raise CatalogError(f"Duplicate tool slug '{tool.slug}'")
            self._tools[tool.slug] = tool
        for model in models or []:
            self._models[model.model_identifier] = model

    @classmethod
    def from_file(cls, path: Path) -> "ToolCatalog":
        """
        Load a catalog file.

        The file holds two top-level lists, "tools" and "models", whose
        entries use the ToolDefinition and AIModel field names.

        Args:
            path: Path to a .yaml/.yml or .json file

        Returns:
            Loaded catalog

        Raises:
            CatalogError: If the file cannot be read or an entry is invalid
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
            if path.suffix == ".json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise CatalogError(f"Could not read catalog {path}: {e}") from e

        if not isinstance(data, dict):
            raise CatalogError(f"Catalog {path} must be a mapping with 'tools' and 'models'")

        try:
            tools = [ToolDefinition.model_validate(item) for item in data.get("tools") or []]
            models = [AIModel.model_validate(item) for item in data.get("models") or []]
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog entry in {path}: {e}") from e

        logger.debug(
            f"Loaded catalog {path}",
            context={"tool_count": len(tools), "model_count": len(models)},
        )
        return cls(tools, models)

    def get_tool(self, slug: str, include_unpublished: bool = False) -> ToolDefinition:
        """
        Look up a tool by slug.

        Raises:
            ToolNotFound: If there is no such tool, or it is unpublished
        """
        tool = self._tools.get(slug)
        if tool is None or (not tool.is_published and not include_unpublished):
            raise ToolNotFound(slug)
        return tool

    def list_published_tools(self) -> list[ToolDefinition]:
        return sorted(
            (tool for tool in self._tools.values() if tool.is_published),
            key=lambda tool: tool.name.lower(),
        )

    def list_models(self) -> list[AIModel]:
        return sorted(self._models.values(), key=lambda model: model.display_name.lower())

    def list_active_models(self, identifiers: Optional[Iterable[str]] = None) -> set[AIModel]:
        """
        Return active models, restricted to the given identifiers when provided.

        Args:
            identifiers: Identifiers to look up (all models if None)

        Returns:
            Set of active AIModel objects
        """
        if identifiers is None:
            candidates = self._models.values()
        else:
            candidates = [self._models[i] for i in identifiers if i in self._models]
        return {model for model in candidates if model.is_active}
