"""API clients for external services."""

from .fal import FalClient
from .gemini import GeminiClient
from .media import MediaClient
from .replicate import ReplicateClient

__all__ = ["FalClient", "GeminiClient", "MediaClient", "ReplicateClient"]
