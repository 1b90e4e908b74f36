"""AI-backed name generator tools: field validation, model selection and reply normalization."""

from namegen.core.catalog import ToolCatalog
from namegen.core.errors import NameGenError, ParameterValidationError
from namegen.core.pipeline import GenerationPipeline
from namegen.schemas.fields import FieldSchema
from namegen.schemas.generation import GenerationRequest, GenerationResponse, SavedName
from namegen.schemas.tool import AIModel, ToolDefinition

__all__ = [
    "AIModel",
    "FieldSchema",
    "GenerationPipeline",
    "GenerationRequest",
    "GenerationResponse",
    "NameGenError",
    "ParameterValidationError",
    "SavedName",
    "ToolCatalog",
    "ToolDefinition",
]
