"""Convert one schema property into a ModelParameter."""

from typing import Any

from .refs import resolve_ref
from ..models.schema import ModelParameter, ParameterType

# Internal/system params never shown in the UI
EXCLUDED_PARAMS = frozenset({
    "webhook",
    "webhook_events_filter",
    "sync_mode",
    "disable_safety_checker",
    "go_fast",
    "enable_safety_checker",
    "output_format",
    "output_quality",
    "request_id",
})

PARAMETER_TYPES: frozenset[ParameterType] = frozenset({"integer", "number", "boolean", "array"})


def _parameter_type(value: Any) -> ParameterType | None:
    """The value when it is a single supported type name. Union and object types are not."""
    return value if isinstance(value, str) and value in PARAMETER_TYPES else None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _merge_all_of(
    all_of: list[Any], components: dict[str, Any] | None
) -> tuple[ParameterType | None, list[Any] | None, Any, str | None]:
    """Collect type/enum/default/description from allOf items. First found wins."""
    type_: ParameterType | None = None
    enum: list[Any] | None = None
    default: Any = None
    description: str | None = None

    for item in all_of:
        if not isinstance(item, dict):
            continue
        ref = item.get("$ref")
        if isinstance(ref, str):
            resolved = resolve_ref(ref, components)
            if not resolved:
                continue
            if type_ is None:
                type_ = _parameter_type(resolved.get("type"))
            if enum is None and isinstance(resolved.get("enum"), list):
                enum = resolved["enum"]
            if default is None and resolved.get("default") is not None:
                default = resolved["default"]
            if description is None and resolved.get("description"):
                description = resolved["description"]
        elif enum is None and isinstance(item.get("enum"), list):
            enum = item["enum"]

    return type_, enum, default, description


def convert_property(
    name: str,
    prop: dict[str, Any],
    required: list[str],
    components: dict[str, Any] | None = None,
) -> ModelParameter | None:
    """
    Convert a schema property to a ModelParameter.

    Args:
        name: Property name
        prop: Property schema object
        required: Names listed in the schema's "required" array
        components: components.schemas table for $ref resolution

    Returns:
        ModelParameter, or None for excluded (internal) properties
    """
    if name in EXCLUDED_PARAMS:
        return None

    type_: ParameterType = "string"
    resolved_enum = None
    resolved_default = None
    resolved_description = None

    declared = _parameter_type(prop.get("type"))
    all_of = prop.get("allOf")

    if declared:
        type_ = declared
    elif isinstance(all_of, list) and all_of and components:
        resolved_type, resolved_enum, resolved_default, resolved_description = _merge_all_of(
            all_of, components
        )
        if resolved_type:
            type_ = resolved_type

    # Enum declared on the property beats one found through $ref
    enum = prop["enum"] if isinstance(prop.get("enum"), list) else resolved_enum

    return ModelParameter(
        name=name,
        type=type_,
        required=name in required,
        description=prop.get("description") or resolved_description,
        default=prop["default"] if "default" in prop else resolved_default,
        minimum=prop["minimum"] if _is_number(prop.get("minimum")) else None,
        maximum=prop["maximum"] if _is_number(prop.get("maximum")) else None,
        enum=enum,
    )
