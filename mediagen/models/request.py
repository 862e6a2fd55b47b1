"""Caller-facing generate request."""

from dataclasses import dataclass, field
from typing import Any

from ..errors import ValidationError


@dataclass
class SelectedModel:
    """Model picked in the UI."""
    provider: str
    model_id: str
    display_name: str


@dataclass
class GenerateRequest:
    """Body of POST /generate."""
    prompt: str = ""
    images: list[str] = field(default_factory=list)
    model: str = "nano-banana-pro"          # Gemini model key, used when no selectedModel
    aspect_ratio: str | None = None
    resolution: str | None = None
    use_google_search: bool = False
    selected_model: SelectedModel | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    dynamic_inputs: dict[str, Any] = field(default_factory=dict)

    @property
    def provider(self) -> str:
        return self.selected_model.provider if self.selected_model else "gemini"

    @classmethod
    def from_dict(cls, body: dict[str, Any]) -> "GenerateRequest":
        """
        Build from a JSON body with camelCase keys.

        Raises:
            ValidationError: a field has the wrong JSON shape
        """
        selected = _field(body, "selectedModel", dict)
        selected_model = None
        if selected:
            model_id = selected.get("modelId") or ""
            display_name = selected.get("displayName") or model_id
            if not isinstance(model_id, str) or not isinstance(display_name, str):
                raise ValidationError("selectedModel.modelId and selectedModel.displayName must be strings")
            selected_model = SelectedModel(
                provider=_field(selected, "provider", str) or "gemini",
                model_id=model_id,
                display_name=display_name,
            )

        images = _field(body, "images", list) or []
        if not all(isinstance(image, str) for image in images):
            raise ValidationError("images must be a list of strings")

        return cls(
            prompt=_field(body, "prompt", str) or "",
            images=list(images),
            model=_field(body, "model", str) or "nano-banana-pro",
            aspect_ratio=_field(body, "aspectRatio", str),
            resolution=_field(body, "resolution", str),
            use_google_search=bool(body.get("useGoogleSearch", False)),
            selected_model=selected_model,
            parameters=dict(_field(body, "parameters", dict) or {}),
            dynamic_inputs=dict(_field(body, "dynamicInputs", dict) or {}),
        )


def _field(body: dict[str, Any], key: str, expected: type) -> Any:
    """body[key] when present, checked against the expected JSON shape."""
    value = body.get(key)
    if value is not None and not isinstance(value, expected):
        kind = {dict: "an object", list: "a list", str: "a string"}[expected]
        raise ValidationError(f"{key} must be {kind}")
    return value
