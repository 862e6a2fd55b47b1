"""Heuristic mapping from generic input names to provider field names."""

from typing import Any, Iterable

# Generic name -> candidate schema property names, in priority order
INPUT_PATTERNS: dict[str, list[str]] = {
    # Text/prompt inputs
    "prompt": ["prompt", "text", "caption", "input_text", "description", "query"],
    "negativePrompt": ["negative_prompt", "negative", "neg_prompt", "negative_text"],

    # Image inputs
    "image": ["image_url", "image", "first_frame", "start_image", "init_image",
              "reference_image", "input_image", "source_image", "img", "photo"],

    # Video/media settings
    "aspectRatio": ["aspect_ratio", "ratio", "size", "dimensions", "output_size"],
    "duration": ["duration", "length", "num_frames", "seconds", "video_length"],
    "fps": ["fps", "frame_rate", "framerate", "frames_per_second"],

    # Audio settings
    "audio": ["audio_enabled", "with_audio", "enable_audio", "audio", "sound"],

    # Generation settings
    "seed": ["seed", "random_seed", "noise_seed"],
    "steps": ["steps", "num_steps", "num_inference_steps", "inference_steps"],
    "guidance": ["guidance_scale", "guidance", "cfg_scale", "cfg"],

    # Model-specific
    "scheduler": ["scheduler", "sampler", "sampler_name"],
    "strength": ["strength", "denoise", "denoising_strength"],
}


def _find_match(candidates: list[str], property_names: list[str]) -> str | None:
    # Exact literal match on any candidate wins over substring matches
    for candidate in candidates:
        if candidate in property_names:
            return candidate

    for candidate in candidates:
        pattern = candidate.lower()
        for name in property_names:
            lowered = name.lower()
            if lowered and (pattern in lowered or lowered in pattern):
                return name
    return None


def map_inputs(
    property_names: Iterable[str],
    patterns: dict[str, list[str]] = INPUT_PATTERNS,
) -> dict[str, str]:
    """
    Map generic names (prompt, image, seed, ...) to the schema's property names.

    Generic names without any match are left out of the result.
    """
    names = list(property_names)
    param_map: dict[str, str] = {}
    for generic_name, candidates in patterns.items():
        match = _find_match(candidates, names)
        if match:
            param_map[generic_name] = match
    return param_map


def input_property_names(openapi_schema: dict[str, Any] | None) -> list[str]:
    """Property names of components.schemas.Input in an OpenAPI document."""
    if not isinstance(openapi_schema, dict):
        return []
    schemas = (openapi_schema.get("components") or {}).get("schemas") or {}
    properties = (schemas.get("Input") or {}).get("properties")
    if not isinstance(properties, dict):
        return []
    return list(properties.keys())
