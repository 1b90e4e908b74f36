"""Error taxonomy for the name generation pipeline."""

from typing import Any, Optional


class NameGenError(Exception):
    """Base class for every error raised by namegen."""

    code = "NameGenError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a JSON-serializable dictionary."""
        return {"code": self.code, "message": self.message}


class FieldValidationError(NameGenError):
    """A single configurable field failed validation."""

    code = "FieldValidationError"

    def __init__(self, field: str, constraint: str, message: str):
        """
        Initialize field validation error.

        Args:
            field: Name of the field that failed
            constraint: Short name of the violated constraint (e.g. 'min', 'options')
            message: Human readable explanation
        """
        super().__init__(message)
        self.field = field
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        data["constraint"] = self.constraint
        return data


class MissingRequiredField(FieldValidationError):
    code = "MissingRequiredField"


class OutOfRange(FieldValidationError):
    code = "OutOfRange"


class InvalidOption(FieldValidationError):
    code = "InvalidOption"


class InvalidValue(FieldValidationError):
    """Value cannot be coerced to the type the field declares."""

    code = "InvalidValue"


class InvalidSchema(FieldValidationError):
    """The tool's own configuration is inconsistent."""

    code = "InvalidSchema"


class ParameterValidationError(NameGenError):
    """Aggregates every field failure from one merge."""

    code = "ParameterValidationError"

    def __init__(self, errors: list[FieldValidationError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"{len(self.errors)} parameter(s) failed validation: {summary}")

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]

    def for_field(self, field: str) -> list[FieldValidationError]:
        return [e for e in self.errors if e.field == field]

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["errors"] = [e.to_dict() for e in self.errors]
        return data


class ModelSelectionError(NameGenError):
    """Base class for model resolution failures."""

    code = "ModelSelectionError"

    def __init__(self, message: str, model_identifier: Optional[str] = None):
        super().__init__(message)
        self.model_identifier = model_identifier

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.model_identifier is not None:
            data["model_identifier"] = self.model_identifier
        return data


class ModelNotAllowed(ModelSelectionError):
    code = "ModelNotAllowed"


class ModelInactive(ModelSelectionError):
    code = "ModelInactive"


class NoModelAvailable(ModelSelectionError):
    code = "NoModelAvailable"


class ProviderError(NameGenError):
    """The AI provider call failed (network, timeout, auth, provider-side error)."""

    code = "ProviderError"

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable


class EmptyOrMalformedResponse(NameGenError):
    code = "EmptyOrMalformedResponse"

    def __init__(self, message: str = "Provider reply contained no usable names"):
        super().__init__(message)


class ToolNotFound(NameGenError):
    code = "ToolNotFound"

    def __init__(self, slug: str):
        super().__init__(f"No published tool with slug '{slug}'")
        self.slug = slug


class CatalogError(NameGenError):
    """Catalog file could not be read or parsed."""

    code = "CatalogError"


class SavedNameError(NameGenError):
    code = "SavedNameError"


class DuplicateSavedName(SavedNameError):
    code = "DuplicateSavedName"
