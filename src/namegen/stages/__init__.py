"""Generation pipeline stages."""

from namegen.stages.field_validator import MISSING, FieldValidator
from namegen.stages.model_selector import ModelSelector
from namegen.stages.parameter_merger import ParameterMerger
from namegen.stages.request_builder import RequestBuilder
from namegen.stages.response_normalizer import ResponseNormalizer

__all__ = [
    "MISSING",
    "FieldValidator",
    "ParameterMerger",
    "ModelSelector",
    "RequestBuilder",
    "ResponseNormalizer",
]
