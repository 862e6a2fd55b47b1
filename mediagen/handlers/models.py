"""Lambda handler for GET /models/{modelId}?provider=replicate|fal."""

import json
import logging
from urllib.parse import unquote

from . import configure_logging
from .http import error_response, get_headers, json_response
from ..errors import GenerationError, ValidationError
from ..schema.store import SchemaStore
from ..services.schema import SchemaService
from ..utils import new_request_id

logger = logging.getLogger(__name__)

# One store per Lambda container, shared across invocations
schema_service = SchemaService(SchemaStore())


def get_model_id(event: dict) -> str:
    """Percent-decoded model id from the path parameter (or the raw path)."""
    model_id = (event.get("pathParameters") or {}).get("modelId")
    if not model_id:
        path = event.get("path") or ""
        _, _, model_id = path.partition("/models/")
    return unquote(model_id or "")


def handler(event, context, service: SchemaService | None = None):
    """
    Return the parameter schema of a provider model.

    Headers:
        X-Replicate-Key: required for Replicate models
        X-Fal-Key: optional for fal.ai models

    Output:
    {
        "success": true,
        "parameters": [...],
        "inputs": [...],
        "cached": false
    }
    """
    configure_logging()
    service = service or schema_service
    request_id = new_request_id()

    model_id = get_model_id(event)
    provider = (event.get("queryStringParameters") or {}).get("provider")
    logger.info(f"[ModelSchema:{request_id}] Fetching schema for {model_id} (provider: {provider})")

    try:
        if not model_id:
            raise ValidationError("Missing model id")
        schema, cached = service.lookup(provider, model_id, get_headers(event), request_id)
    except GenerationError as e:
        logger.error(f"[ModelSchema:{request_id}] Error: {e}")
        return error_response(e, request_id)
    except Exception as e:
        logger.exception(f"[ModelSchema:{request_id}] Error: {e}")
        return json_response(500, {"success": False, "error": str(e) or "Unknown error"}, request_id)

    return json_response(200, {
        "success": True,
        "parameters": [p.to_dict() for p in schema.parameters],
        "inputs": [i.to_dict() for i in schema.inputs],
        "cached": cached,
    }, request_id)


# Local testing
if __name__ == "__main__":
    import os
    import sys

    if len(sys.argv) < 3:
        print("Usage: python -m mediagen.handlers.models <provider> <model_id>")
        print()
        print("Arguments:")
        print("  provider - replicate | fal")
        print("  model_id - e.g. 'black-forest-labs/flux-schnell' or 'fal-ai/flux/dev'")
        print()
        print("Keys are read from REPLICATE_API_TOKEN / FAL_KEY in the environment.")
        sys.exit(1)

    event = {
        "pathParameters": {"modelId": sys.argv[2]},
        "queryStringParameters": {"provider": sys.argv[1]},
        "headers": {
            "X-Replicate-Key": os.getenv("REPLICATE_API_TOKEN"),
            "X-Fal-Key": os.getenv("FAL_KEY"),
        },
    }

    result = handler(event, None)
    print(f"Status: {result['statusCode']}")
    print(json.dumps(json.loads(result["body"]), indent=2))
