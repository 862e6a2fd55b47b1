"""Lambda handler for POST /generate."""

import json
import logging
from datetime import datetime, timezone

from . import configure_logging
from .http import error_response, get_headers, json_response, parse_body
from ..errors import GenerationError
from ..models.request import GenerateRequest
from ..services.generation import GenerationService, to_response_body
from ..utils import new_request_id

logger = logging.getLogger(__name__)

generation_service = GenerationService()


def handler(event, context, service: GenerationService | None = None):
    """
    Generate an image or video with the selected provider.

    Input payload:
    {
        "prompt": "a red fox in the snow",
        "images": ["data:image/png;base64,..."],
        "model": "nano-banana-pro",
        "selectedModel": {"provider": "fal", "modelId": "fal-ai/flux/dev", "displayName": "FLUX.1 [dev]"},
        "parameters": {"seed": 42},
        "dynamicInputs": {"image_url": "data:image/png;base64,..."}
    }

    Output: {"success": true, "image" | "video" | "videoUrl": ..., "contentType": "image" | "video"}
    """
    configure_logging()
    service = service or generation_service
    request_id = new_request_id()
    logger.info(f"[API:{request_id}] ========== NEW GENERATE REQUEST ==========")
    logger.info(f"[API:{request_id}] Timestamp: {datetime.now(timezone.utc).isoformat()}")

    try:
        request = GenerateRequest.from_dict(parse_body(event))
        output = service.generate(request, get_headers(event), request_id)
    except GenerationError as e:
        logger.error(f"[API:{request_id}] {type(e).__name__}: {e}")
        return error_response(e, request_id)
    except Exception as e:
        logger.exception(f"[API:{request_id}] Unexpected error: {e}")
        message = str(e) or "Generation failed"
        if "429" in message:
            return json_response(429, {
                "success": False,
                "error": "Rate limit reached. Please wait and try again.",
            }, request_id)
        return json_response(500, {"success": False, "error": message}, request_id)

    return json_response(200, to_response_body(output), request_id)


# Local testing
if __name__ == "__main__":
    import os
    import sys

    if len(sys.argv) < 3:
        print("Usage: python -m mediagen.handlers.generate <provider> <prompt> [model_id] [extra_json]")
        print()
        print("Arguments:")
        print("  provider   - gemini | replicate | fal")
        print("  prompt     - text prompt")
        print("  model_id   - provider model id (gemini: nano-banana | nano-banana-pro)")
        print("  extra_json - JSON object merged into the request body")
        print()
        print("Example:")
        print('  python -m mediagen.handlers.generate fal "a red fox in the snow" fal-ai/flux/schnell \'{"parameters": {"seed": 1}}\'')
        sys.exit(1)

    provider, prompt = sys.argv[1], sys.argv[2]
    model_id = sys.argv[3] if len(sys.argv) > 3 else "nano-banana-pro"

    body = {"prompt": prompt, "model": model_id}
    if provider != "gemini":
        body["selectedModel"] = {"provider": provider, "modelId": model_id, "displayName": model_id}
    if len(sys.argv) > 4:
        body.update(json.loads(sys.argv[4]))

    event = {
        "body": json.dumps(body),
        "headers": {
            "X-Replicate-API-Key": os.getenv("REPLICATE_API_TOKEN"),
            "X-Fal-API-Key": os.getenv("FAL_KEY"),
        },
    }

    result = handler(event, None)
    payload = json.loads(result["body"])
    for key in ("image", "video"):
        if isinstance(payload.get(key), str) and len(payload[key]) > 100:
            payload[key] = f"{payload[key][:100]}... ({len(payload[key])} chars)"
    print(f"Status: {result['statusCode']}")
    print(json.dumps(payload, indent=2))
