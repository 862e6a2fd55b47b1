"""Split a schema's properties into connectable inputs and tunable parameters."""

from typing import Any

from .classifier import convert_property
from ..models.schema import ExtractedSchema, ModelInput, ModelParameter
from ..utils import to_label

# Image input property patterns
IMAGE_INPUT_PATTERNS = [
    "image_url",
    "image",
    "first_frame",
    "last_frame",
    "tail_image_url",
    "start_image",
    "end_image",
    "reference_image",
    "init_image",
    "mask_image",
    "control_image",
]

# Text input properties (exact names only)
TEXT_INPUT_NAMES = ["prompt", "negative_prompt"]

# Params surfaced first in the UI
PRIORITY_PARAMS = frozenset({
    "seed",
    "num_inference_steps",
    "inference_steps",
    "steps",
    "guidance_scale",
    "guidance",
    "negative_prompt",
    "width",
    "height",
    "num_outputs",
    "num_images",
    "scheduler",
    "strength",
    "cfg_scale",
    "lora_scale",
})


def is_image_input(name: str) -> bool:
    """Exact pattern, "_<pattern>" suffix, or "image" anywhere in the name."""
    if "image" in name.lower():
        return True
    return any(name == pattern or name.endswith("_" + pattern) for pattern in IMAGE_INPUT_PATTERNS)


def is_text_input(name: str) -> bool:
    return name in TEXT_INPUT_NAMES


def sort_parameters(parameters: list[ModelParameter]) -> list[ModelParameter]:
    """Priority params first, then alphabetical."""
    return sorted(parameters, key=lambda p: (p.name not in PRIORITY_PARAMS, p.name))


def sort_inputs(inputs: list[ModelInput]) -> list[ModelInput]:
    """Required first, image before text, then alphabetical."""
    return sorted(inputs, key=lambda i: (not i.required, i.type != "image", i.name))


def extract_schema(
    schema: dict[str, Any],
    components: dict[str, Any] | None = None,
) -> ExtractedSchema:
    """
    Extract ModelParameters and ModelInputs from an OpenAPI schema object.

    Args:
        schema: Object schema with "properties" and optional "required"
        components: components.schemas table for $ref resolution

    Returns:
        ExtractedSchema with sorted parameters and inputs (empty when the
        schema has no properties)
    """
    properties = schema.get("properties")
    required = schema.get("required") or []

    if not isinstance(properties, dict):
        return ExtractedSchema()

    parameters: list[ModelParameter] = []
    inputs: list[ModelInput] = []

    for name, prop in properties.items():
        if not isinstance(prop, dict):
            prop = {}

        if is_image_input(name) or is_text_input(name):
            inputs.append(ModelInput(
                name=name,
                type="image" if is_image_input(name) else "text",
                required=name in required,
                label=to_label(name),
                description=prop.get("description"),
            ))
            continue

        param = convert_property(name, prop, required, components)
        if param:
            parameters.append(param)

    return ExtractedSchema(
        parameters=sort_parameters(parameters),
        inputs=sort_inputs(inputs),
    )
