"""Data models."""

from .generation import GenerationInput, GenerationOutput, MediaOutput, ProviderModel
from .request import GenerateRequest, SelectedModel
from .schema import ExtractedSchema, ModelInput, ModelParameter, SchemaCacheEntry

__all__ = [
    "ExtractedSchema",
    "GenerateRequest",
    "GenerationInput",
    "GenerationOutput",
    "MediaOutput",
    "ModelInput",
    "ModelParameter",
    "ProviderModel",
    "SchemaCacheEntry",
    "SelectedModel",
]
