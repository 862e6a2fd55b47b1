"""Generation request/response models."""

from dataclasses import dataclass, field
from typing import Any, Literal

OutputType = Literal["image", "video"]


@dataclass(frozen=True)
class ProviderModel:
    """A concrete model on a provider."""
    id: str                      # provider model id, e.g. "black-forest-labs/flux-schnell"
    name: str                    # display name, prefixed to provider errors
    provider: str                # "gemini" | "replicate" | "fal"
    capabilities: tuple[str, ...] = ("text-to-image",)
    description: str | None = None

    def supports(self, capability: str) -> bool:
        return capability in self.capabilities


@dataclass
class GenerationInput:
    """Normalized request handed to a provider adapter. Built per request."""
    model: ProviderModel
    prompt: str
    images: list[str] = field(default_factory=list)            # data URIs or URLs
    parameters: dict[str, Any] = field(default_factory=dict)
    dynamic_inputs: dict[str, Any] = field(default_factory=dict)  # explicit field name -> value


@dataclass(frozen=True)
class MediaOutput:
    """One generated artifact."""
    type: OutputType
    data: str                    # data URI, or the bare URL for oversized videos
    url: str | None = None       # remote location, when the provider hosted it

    @property
    def is_inline(self) -> bool:
        return self.data.startswith("data:")


@dataclass
class GenerationOutput:
    """Successful generation. Failures are raised as GenerationError."""
    outputs: list[MediaOutput]
