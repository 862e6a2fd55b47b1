"""Provider adapter interface and shared request/response helpers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

import requests

from ..clients.base import parse_json
from ..errors import MissingCredentialError, ProviderError, RateLimitError, ValidationError
from ..models.generation import GenerationInput, GenerationOutput, ProviderModel
from ..models.request import GenerateRequest
from ..utils import truncate_for_log

logger = logging.getLogger(__name__)


class ProviderAdapter(ABC):
    """One provider: turns a GenerationInput into a GenerationOutput or raises GenerationError."""

    CREDENTIAL_HEADER: str = ""
    REQUIRES_API_KEY: bool = True
    MISSING_KEY_MESSAGE: str = "API key not provided."

    def __init__(self, api_key: str | None, session: requests.Session | None = None, request_id: str = ""):
        self.api_key = api_key
        self.session = session
        self.request_id = request_id

    @classmethod
    def resolve_api_key(cls, headers: dict[str, str]) -> str | None:
        """Pick the caller's key from lower-cased request headers."""
        api_key = headers.get(cls.CREDENTIAL_HEADER.lower()) or None
        if not api_key and cls.REQUIRES_API_KEY:
            raise MissingCredentialError(cls.MISSING_KEY_MESSAGE)
        return api_key

    @classmethod
    def build_input(cls, request: GenerateRequest) -> GenerationInput:
        """Default: the caller's selectedModel names the provider model."""
        selected = request.selected_model
        if not selected or not selected.model_id:
            raise ValidationError("selectedModel.modelId is required")
        return GenerationInput(
            model=ProviderModel(
                id=selected.model_id,
                name=selected.display_name,
                provider=selected.provider,
            ),
            prompt=request.prompt,
            images=list(request.images),
            parameters=dict(request.parameters),
            dynamic_inputs=dict(request.dynamic_inputs),
        )

    @abstractmethod
    def submit(self, generation_input: GenerationInput) -> GenerationOutput:
        """Run one generation."""
        pass

    def _log(self, message: str, level: int = logging.INFO):
        logger.log(level, f"[API:{self.request_id}] {message}")


def filter_dynamic_inputs(dynamic_inputs: dict[str, Any]) -> dict[str, Any]:
    """Drop null and empty-string values."""
    return {
        key: value
        for key, value in dynamic_inputs.items()
        if value is not None and value != ""
    }


def build_payload(
    generation_input: GenerationInput,
    load_param_map: Callable[[], dict[str, str]],
    default_image_field: str,
) -> dict[str, Any]:
    """
    Build the provider request body.

    Explicit dynamic inputs (field name -> value) are merged over the
    parameters as-is. Without them, the generic prompt/image/parameters are
    placed at the field names found by load_param_map (called lazily).
    """
    dynamic_inputs = filter_dynamic_inputs(generation_input.dynamic_inputs)
    if dynamic_inputs:
        return {**generation_input.parameters, **dynamic_inputs}

    param_map = load_param_map()
    payload: dict[str, Any] = {}

    if generation_input.prompt:
        payload[param_map.get("prompt", "prompt")] = generation_input.prompt

    if generation_input.images:
        payload[param_map.get("image", default_image_field)] = generation_input.images[0]

    for key, value in generation_input.parameters.items():
        payload[param_map.get(key, key)] = value

    return payload


def extract_error_detail(response: requests.Response) -> str:
    """
    Pull a readable message out of a provider error body.

    Known envelopes:
        {"error": {"message": "..."}}
        {"detail": [{"msg": "..."}, ...]}   (validation errors, joined with "; ")
        {"detail": "..."}
        {"message": "..."}
        {"error": "..."}
    """
    text = response.text or ""
    data = parse_json(response)
    if data is None:
        return text or f"HTTP {response.status_code}"

    error = data.get("error")
    detail = data.get("detail")

    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if detail:
        if isinstance(detail, list):
            return "; ".join(
                str(d.get("msg")) if isinstance(d, dict) and d.get("msg") else str(d)
                for d in detail
            )
        return str(detail)
    if data.get("message"):
        return str(data["message"])
    if isinstance(error, str) and error:
        return error
    return text or f"HTTP {response.status_code}"


def raise_for_provider_status(response: requests.Response, model_name: str, rate_limit_hint: str):
    """Raise RateLimitError on 429 and ProviderError on any other non-2xx answer."""
    if response.ok:
        return
    if response.status_code == 429:
        raise RateLimitError(f"{model_name}: Rate limit exceeded. {rate_limit_hint}")
    raise ProviderError(f"{model_name}: {extract_error_detail(response)}")


def log_payload(adapter: ProviderAdapter, payload: dict[str, Any]):
    adapter._log(f"Request body keys: {list(payload.keys())}")
    adapter._log(f"Request body (truncated): {truncate_for_log(payload)}", logging.DEBUG)
