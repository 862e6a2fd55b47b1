"""Schema extraction results."""

from dataclasses import dataclass, field
from typing import Any, Literal

ParameterType = Literal["string", "integer", "number", "boolean", "array"]
InputType = Literal["image", "text"]


@dataclass(frozen=True)
class ModelParameter:
    """A tunable, non-connectable generation setting."""
    name: str
    type: ParameterType
    required: bool = False
    description: str | None = None
    default: Any = None
    minimum: float | None = None
    maximum: float | None = None
    enum: list[Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "required": self.required,
        }
        for key in ("description", "default", "minimum", "maximum", "enum"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


@dataclass(frozen=True)
class ModelInput:
    """A graph-connectable slot (image or text socket)."""
    name: str
    type: InputType
    required: bool
    label: str
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "required": self.required,
            "label": self.label,
        }
        if self.description is not None:
            result["description"] = self.description
        return result


@dataclass(frozen=True)
class ExtractedSchema:
    """Ordered (parameters, inputs) pair produced from one schema."""
    parameters: list[ModelParameter] = field(default_factory=list)
    inputs: list[ModelInput] = field(default_factory=list)


@dataclass(frozen=True)
class SchemaCacheEntry:
    """Cached extraction result. Replaced wholesale on refresh, never mutated."""
    parameters: list[ModelParameter]
    inputs: list[ModelInput]
    timestamp: float
