"""API Gateway event parsing and JSON responses."""

import base64
import json
import logging
from typing import Any

from ..config import MB, RESPONSE_SIZE_WARNING
from ..errors import GenerationError, ValidationError

logger = logging.getLogger(__name__)


def get_headers(event: dict[str, Any]) -> dict[str, str]:
    """Request headers with lower-cased names."""
    headers = event.get("headers") or {}
    return {name.lower(): value for name, value in headers.items() if value is not None}


def parse_body(event: dict[str, Any]) -> dict[str, Any]:
    """JSON object body, base64-decoding it first when API Gateway encoded it."""
    body = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON body: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def json_response(status_code: int, payload: dict[str, Any], request_id: str = "") -> dict[str, Any]:
    """Lambda proxy response with an explicit Content-Length."""
    body = json.dumps(payload)
    size = len(body.encode("utf-8"))
    if size > RESPONSE_SIZE_WARNING:
        logger.warning(f"[API:{request_id}] Response size ({size / MB:.2f}MB) is approaching the 5MB limit!")
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Content-Length": str(size),
        },
        "body": body,
    }


def error_response(error: GenerationError, request_id: str = "") -> dict[str, Any]:
    return json_response(error.status_code, {"success": False, "error": str(error)}, request_id)
