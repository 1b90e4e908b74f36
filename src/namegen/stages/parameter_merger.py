"""Parameter merging stage implementation."""

from collections.abc import Mapping
from typing import Any, Optional

from namegen.core.errors import FieldValidationError, InvalidSchema, ParameterValidationError
from namegen.core.logging import get_logger
from namegen.schemas.fields import FieldSchema
from namegen.schemas.tool import ToolDefinition
from namegen.stages.field_validator import MISSING, FieldValidator

logger = get_logger("namegen.parameter_merger")


class ParameterMerger:
    """Combines a tool's default parameters with caller overrides."""

    def __init__(self, field_validator: Optional[FieldValidator] = None):
        """
        Initialize parameter merger.

        Args:
            field_validator: Validator used per field (a fresh one by default)
        """
        self.field_validator = field_validator or FieldValidator()

    def merge(
        self,
        tool: ToolDefinition,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Merge defaults and overrides into the final parameter set for a tool.

        Args:
            tool: Tool whose configurable_fields and default_parameters apply
            overrides: Caller supplied values keyed by field name

        Returns:
            Mapping with one entry per field that has a value

        Raises:
            ParameterValidationError: If any field fails; lists every failure
        """
        return self.merge_fields(
            tool.configurable_fields,
            tool.default_parameters,
            overrides,
        )

    def merge_fields(
        self,
        fields: list[FieldSchema],
        defaults: Optional[Mapping[str, Any]] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """Merge against an explicit field list. See merge()."""
        defaults = defaults or {}
        overrides = overrides or {}

        errors: list[FieldValidationError] = []
        merged: dict[str, Any] = {}
        seen: set[str] = set()

        for schema in fields:
            if schema.name in seen:
                errors.append(
                    InvalidSchema(
                        schema.name,
                        "name",
                        f"Field name '{schema.name}' is declared more than once",
                    )
                )
                continue
            seen.add(schema.name)

            if schema.name in overrides:
                raw = overrides[schema.name]
            elif schema.name in defaults:
                raw = defaults[schema.name]
            else:
                raw = MISSING

            try:
                value = self.field_validator.validate(schema, raw)
            except FieldValidationError as e:
                errors.append(e)
                continue

            if value is not MISSING:
                merged[schema.name] = value

        ignored = sorted(set(overrides) - seen)
        if ignored:
            logger.debug(
                "Ignoring override keys with no matching field",
                context={"ignored_keys": ignored},
            )

        if errors:
            raise ParameterValidationError(errors)

        return merged
