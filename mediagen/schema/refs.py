"""OpenAPI $ref resolution."""

import re
from typing import Any

REF_RE = re.compile(r"^#/components/schemas/(.+)$")


def resolve_ref(ref: str, components: dict[str, Any] | None) -> dict[str, Any] | None:
    """
    Resolve "#/components/schemas/Name" against a components.schemas table.

    Returns None when the ref has another form or the name is absent.
    """
    if not components:
        return None
    match = REF_RE.match(ref)
    if not match:
        return None
    resolved = components.get(match.group(1))
    return resolved if isinstance(resolved, dict) else None
