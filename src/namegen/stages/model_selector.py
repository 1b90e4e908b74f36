"""Model selection stage implementation."""

from collections.abc import Iterable
from typing import Optional

from namegen.core.errors import (
    InvalidSchema,
    ModelInactive,
    ModelNotAllowed,
    NoModelAvailable,
)
from namegen.schemas.tool import AIModel, ToolDefinition


class ModelSelector:
    """
    Resolves which model identifier a generation request will use.

    An explicit user choice beats the tool's configured default, but both are
    constrained by the tool's allow-list and by which models are active right now.
    """

    def select(
        self,
        tool: ToolDefinition,
        active_models: Iterable[str | AIModel],
        requested: Optional[str] = None,
    ) -> str:
        """
        Select the model identifier for a request.

        Args:
            tool: Tool definition providing the default and the allow-list
            active_models: Currently active models (identifiers or AIModel objects)
            requested: Identifier the caller asked for, if any

        Returns:
            The resolved model identifier

        Raises:
            InvalidSchema: If the tool's default is inconsistent with its allow-list
            ModelNotAllowed: If the requested model is not in the allow-list
            ModelInactive: If the requested model is not currently active
            NoModelAvailable: If no model can be used for this tool
        """
        self._check_consistency(tool)
        active = self._active_identifiers(active_models)
        allowed = tool.available_ai_model_identifiers

        if requested:
            if requested not in allowed:
                raise ModelNotAllowed(
                    f"Model '{requested}' is not available for tool '{tool.slug}'",
                    model_identifier=requested,
                )
            if requested not in active:
                raise ModelInactive(
                    f"Model '{requested}' is not currently active",
                    model_identifier=requested,
                )
            return requested

        default = tool.default_ai_model_identifier
        if default and default in active:
            return default

        raise NoModelAvailable(
            f"Tool '{tool.slug}' has no usable model "
            f"(default: {default or 'none'}, active allowed: "
            f"{', '.join(m for m in allowed if m in active) or 'none'})",
            model_identifier=default,
        )

    def _check_consistency(self, tool: ToolDefinition) -> None:
        default = tool.default_ai_model_identifier
        if default is None:
            return
        if not tool.available_ai_model_identifiers:
            raise InvalidSchema(
                "default_ai_model_identifier",
                "available_ai_model_identifiers",
                f"Tool '{tool.slug}' sets default model '{default}' but allows no models",
            )
        if default not in tool.available_ai_model_identifiers:
            raise InvalidSchema(
                "default_ai_model_identifier",
                "available_ai_model_identifiers",
                f"Tool '{tool.slug}' default model '{default}' is not in its allow-list",
            )

    def _active_identifiers(self, active_models: Iterable[str | AIModel]) -> set[str]:
        identifiers = set()
        for model in active_models:
            if isinstance(model, AIModel):
                if model.is_active:
                    identifiers.add(model.model_identifier)
            else:
                identifiers.add(model)
        return identifiers
