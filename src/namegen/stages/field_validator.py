"""Field validation stage implementation."""

import math
from collections.abc import Mapping
from typing import Any, Callable

from namegen.core.errors import (
    InvalidOption,
    InvalidSchema,
    InvalidValue,
    MissingRequiredField,
    OutOfRange,
)
from namegen.schemas.fields import FieldSchema


class _Missing:
    """Marker for a value the caller did not supply at all (distinct from None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


class FieldValidator:
    """Validates and normalizes one user-supplied value against one FieldSchema."""

    def __init__(self):
        """Initialize the per-type dispatch table."""
        self._validators: dict[str, Callable[[FieldSchema, Any], Any]] = {
            "text": self._validate_text,
            "textarea": self._validate_text,
            "number": self._validate_number,
            "select": self._validate_select,
            "switch": self._validate_switch,
            "list": self._validate_list,
        }

    def validate(self, schema: FieldSchema, value: Any = MISSING) -> Any:
        """
        Validate a value for a field.

        Args:
            schema: Field schema to validate against
            value: Raw value, or MISSING if the caller supplied nothing

        Returns:
            Normalized value, or MISSING if the field is optional, absent and has no default

        Raises:
            FieldValidationError: Subclass naming the field and violated constraint
        """
        # Select fields are checked for a usable schema even when a default would be used.
        if schema.type == "select" and not schema.options:
            raise InvalidSchema(
                schema.name,
                "options",
                f"Select field '{schema.name}' declares no options",
            )

        if value is MISSING:
            if schema.has_default:
                return self.coerce_default(schema)
            if schema.required:
                raise MissingRequiredField(
                    schema.name,
                    "required",
                    f"'{schema.display_label}' is required",
                )
            return MISSING

        validator = self._validators.get(schema.type)
        if validator is None:
            raise InvalidSchema(
                schema.name, "type", f"Unknown field type '{schema.type}'"
            )
        return validator(schema, value)

    def coerce_default(self, schema: FieldSchema) -> Any:
        """
        Convert a field's default to the field's type.

        Defaults are trusted: range and option constraints are not checked,
        and a default that cannot be converted is returned as written. A
        converted default validates to itself, so feeding a merged result
        back in as tool defaults yields the same mapping.
        """
        default = schema.default
        try:
            if schema.type in ("text", "textarea"):
                if isinstance(default, (Mapping, list, tuple, set)):
                    return default
                return str(default)
            if schema.type == "number":
                return self._coerce_number(schema, default)
            if schema.type == "switch":
                return self._coerce_switch(schema, default)
            if schema.type == "list" and isinstance(default, (list, tuple)):
                return list(default)
        except InvalidValue:
            return default
        return default

    def _validate_text(self, schema: FieldSchema, value: Any) -> str:
        if value is None:
            return self._absent_value(schema, "")
        if isinstance(value, (Mapping, list, tuple, set)):
            raise InvalidValue(
                schema.name,
                "type",
                f"'{schema.display_label}' must be text, got {type(value).__name__}",
            )
        text = str(value)
        if schema.required and not text.strip():
            raise MissingRequiredField(
                schema.name, "required", f"'{schema.display_label}' is required"
            )
        return text

    def _validate_number(self, schema: FieldSchema, value: Any) -> float | int:
        if value is None or (isinstance(value, str) and not value.strip()):
            return self._absent_value(schema, None)

        number = self._coerce_number(schema, value)

        if schema.min is not None and number < schema.min:
            raise OutOfRange(
                schema.name,
                "min",
                f"'{schema.display_label}' must be at least {_format_bound(schema.min)}, got {number}",
            )
        if schema.max is not None and number > schema.max:
            raise OutOfRange(
                schema.name,
                "max",
                f"'{schema.display_label}' must be at most {_format_bound(schema.max)}, got {number}",
            )
        return number

    def _coerce_number(self, schema: FieldSchema, value: Any) -> float | int:
        invalid = InvalidValue(
            schema.name,
            "type",
            f"'{schema.display_label}' must be a finite number, got {value!r}",
        )
        if isinstance(value, bool):
            raise invalid
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            number = value
        elif isinstance(value, str):
            stripped = value.strip()
            try:
                return int(stripped)
            except ValueError:
                pass
            try:
                number = float(stripped)
            except ValueError:
                raise invalid from None
        else:
            raise invalid

        if not math.isfinite(number):
            raise invalid
        return number

    def _validate_select(self, schema: FieldSchema, value: Any) -> str:
        if value is None or value == "":
            return self._absent_value(schema, None)
        if value not in schema.options:
            raise InvalidOption(
                schema.name,
                "options",
                f"'{value}' is not a valid choice for '{schema.display_label}'. "
                f"Choose one of: {', '.join(schema.options)}",
            )
        return value

    def _validate_switch(self, schema: FieldSchema, value: Any) -> bool:
        if value is None:
            return self._absent_value(schema, False)
        return self._coerce_switch(schema, value)

    def _coerce_switch(self, schema: FieldSchema, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise InvalidValue(
            schema.name,
            "type",
            f"'{schema.display_label}' must be on or off, got {value!r}",
        )

    def _validate_list(self, schema: FieldSchema, value: Any) -> list[str]:
        if value is None:
            return self._absent_value(schema, [])
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise InvalidValue(
                schema.name,
                "type",
                f"'{schema.display_label}' must be a list of strings, got {type(value).__name__}",
            )
        items = list(value)
        for index, item in enumerate(items):
            if not isinstance(item, str):
                raise InvalidValue(
                    schema.name,
                    "items",
                    f"'{schema.display_label}' item {index} must be a string, got {type(item).__name__}",
                )
        if schema.required and not items:
            raise MissingRequiredField(
                schema.name, "required", f"'{schema.display_label}' needs at least one entry"
            )
        return items

    def _absent_value(self, schema: FieldSchema, empty: Any) -> Any:
        """Handle an explicit null/empty value the same way as an omitted one."""
        if schema.has_default:
            return self.coerce_default(schema)
        if schema.required:
            raise MissingRequiredField(
                schema.name, "required", f"'{schema.display_label}' is required"
            )
        return empty


def _format_bound(bound: float) -> str:
    if float(bound).is_integer():
        return str(int(bound))
    return str(bound)
