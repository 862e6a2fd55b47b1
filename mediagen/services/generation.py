"""Generation orchestrator - validate, dispatch to a provider, shape the response."""

import logging
from typing import Any, Callable, Type

import requests

from ..errors import EmptyResponseError, ValidationError
from ..models.generation import GenerationOutput, MediaOutput
from ..models.request import GenerateRequest
from ..providers import ProviderAdapter, get_adapter_class

logger = logging.getLogger(__name__)


def validate_request(request: GenerateRequest):
    """
    A request needs a prompt, an image, or an image/frame dynamic input.

    Raises:
        ValidationError: none of them is present
    """
    has_prompt = bool(request.prompt or request.dynamic_inputs.get("prompt"))
    has_images = bool(request.images)
    has_image_inputs = any(
        "frame" in key or "image" in key for key in request.dynamic_inputs
    )
    if not (has_prompt or has_images or has_image_inputs):
        raise ValidationError("Prompt or image input is required")


def to_response_body(output: MediaOutput) -> dict[str, Any]:
    """Shape one output into the caller-facing response body."""
    if output.type == "video":
        if output.is_inline:
            return {"success": True, "video": output.data, "contentType": "video"}
        return {"success": True, "videoUrl": output.data, "contentType": "video"}
    return {"success": True, "image": output.data, "contentType": "image"}


class GenerationService:
    """Top-level entry point for POST /generate."""

    def __init__(
        self,
        session: requests.Session | None = None,
        adapter_lookup: Callable[[str], Type[ProviderAdapter]] = get_adapter_class,
    ):
        self.session = session
        self.adapter_lookup = adapter_lookup

    def generate(
        self,
        request: GenerateRequest,
        headers: dict[str, str],
        request_id: str = "",
    ) -> MediaOutput:
        """
        Run a generation and return its first output.

        Args:
            request: Parsed request body
            headers: Lower-cased request headers carrying credentials
            request_id: Log tag

        Raises:
            GenerationError: any validation, credential or provider failure
        """
        validate_request(request)

        provider = request.provider
        logger.info(f"[API:{request_id}] Provider: {provider}")

        adapter_cls = self.adapter_lookup(provider)
        api_key = adapter_cls.resolve_api_key(headers)
        generation_input = adapter_cls.build_input(request)

        adapter = adapter_cls(api_key, session=self.session, request_id=request_id)
        result: GenerationOutput = adapter.submit(generation_input)

        if not result.outputs or not result.outputs[0].data:
            raise EmptyResponseError("No output in generation result")

        output = result.outputs[0]
        logger.info(f"[API:{request_id}] {provider} {output.type} generation successful")
        return output
