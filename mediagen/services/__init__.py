"""Business logic services."""

from .generation import GenerationService
from .schema import SchemaService

__all__ = ["GenerationService", "SchemaService"]
