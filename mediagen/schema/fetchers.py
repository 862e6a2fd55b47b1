"""Fetch provider OpenAPI documents and extract parameters/inputs."""

import logging
from typing import Any

from .extractor import extract_schema
from .refs import resolve_ref
from ..clients.base import parse_json
from ..clients.fal import FalClient
from ..clients.replicate import ReplicateClient
from ..errors import ProviderError, RateLimitError
from ..models.schema import ExtractedSchema

logger = logging.getLogger(__name__)


def _components(openapi: dict[str, Any]) -> dict[str, Any]:
    components = openapi.get("components")
    schemas = components.get("schemas") if isinstance(components, dict) else None
    return schemas if isinstance(schemas, dict) else {}


def fetch_replicate_schema(client: ReplicateClient, model_id: str) -> ExtractedSchema:
    """
    Fetch a Replicate model and extract its Input schema.

    The schema lives at latest_version.openapi_schema.components.schemas.Input.

    Raises:
        RateLimitError: Replicate answered 429
        ProviderError: any other non-2xx answer
        TransportError: network failure
    """
    response = client.get_model(model_id)
    if response.status_code == 429:
        raise RateLimitError("Replicate API error: 429")
    if not response.ok:
        raise ProviderError(f"Replicate API error: {response.status_code}")

    data = parse_json(response) or {}
    openapi = (data.get("latest_version") or {}).get("openapi_schema")
    if not isinstance(openapi, dict):
        logger.warning(f"No OpenAPI schema for Replicate model {model_id}")
        return ExtractedSchema()

    components = _components(openapi)
    input_schema = components.get("Input")
    if not isinstance(input_schema, dict):
        logger.warning(f"No Input schema for Replicate model {model_id}")
        return ExtractedSchema()

    return extract_schema(input_schema, components)


def find_request_schema(openapi: dict[str, Any]) -> dict[str, Any] | None:
    """Find the JSON request body schema of the first POST operation that has one."""
    components = _components(openapi)
    paths = openapi.get("paths") or {}

    for path_item in paths.values():
        if not isinstance(path_item, dict):
            continue
        post = path_item.get("post") or {}
        content = (post.get("requestBody") or {}).get("content") or {}
        schema = (content.get("application/json") or {}).get("schema")
        if not isinstance(schema, dict):
            continue

        ref = schema.get("$ref")
        if isinstance(ref, str):
            resolved = resolve_ref(ref, components)
            if resolved:
                return resolved
        elif schema.get("properties"):
            return schema
    return None


def fetch_fal_schema(client: FalClient, model_id: str) -> ExtractedSchema:
    """
    Fetch a fal.ai endpoint's OpenAPI document via the Model Search API.

    Any answer that does not yield an input schema gives an empty result so
    generation can still proceed with default field names.

    Raises:
        TransportError: network failure
    """
    response = client.search_model(model_id)
    if not response.ok:
        logger.warning(f"fal.ai Model Search API returned {response.status_code} for {model_id}")
        return ExtractedSchema()

    data = parse_json(response) or {}
    models = data.get("models") or []
    openapi = models[0].get("openapi") if models and isinstance(models[0], dict) else None
    if not isinstance(openapi, dict):
        logger.warning(f"No OpenAPI schema in fal.ai response for {model_id}")
        return ExtractedSchema()

    input_schema = find_request_schema(openapi)
    if not input_schema:
        logger.warning(f"Could not find input schema in fal.ai OpenAPI spec for {model_id}")
        return ExtractedSchema()

    return extract_schema(input_schema, _components(openapi))
