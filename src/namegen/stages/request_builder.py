"""Generation request building stage implementation."""

import copy
from collections.abc import Mapping
from typing import Any

from namegen.schemas.generation import GenerationRequest
from namegen.schemas.tool import ToolDefinition


class RequestBuilder:
    """Composes a GenerationRequest from already-validated inputs."""

    def build(
        self,
        tool: ToolDefinition,
        model_identifier: str,
        parameters: Mapping[str, Any],
    ) -> GenerationRequest:
        """
        Build the request sent to the AI provider.

        Args:
            tool: Tool supplying the prompt category
            model_identifier: Identifier resolved by ModelSelector
            parameters: Mapping produced by ParameterMerger

        Returns:
            Immutable GenerationRequest
        """
        return GenerationRequest(
            ai_prompt_category=tool.ai_prompt_category,
            model_identifier=model_identifier,
            parameters=copy.deepcopy(dict(parameters)),
        )
