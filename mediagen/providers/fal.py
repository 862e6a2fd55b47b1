"""Synchronous HTTP adapter for fal.ai."""

import logging
from typing import Any

import requests

from . import register
from .base import ProviderAdapter, build_payload, log_payload, raise_for_provider_status
from .media import MediaNormalizer
from ..clients.base import parse_json
from ..clients.fal import FalClient
from ..clients.media import MediaClient
from ..errors import EmptyResponseError, TransportError
from ..models.generation import GenerationInput, GenerationOutput
from ..schema.mapping import input_property_names, map_inputs


def find_media_url(result: dict[str, Any]) -> tuple[str | None, bool]:
    """
    Locate the output URL in a fal.ai result.

    Checked in order: video.url, images[0].url, image.url, output (string).

    Returns:
        (url or None, whether the response marked it as video)
    """
    video = result.get("video")
    if isinstance(video, dict) and video.get("url"):
        return video["url"], True

    images = result.get("images")
    if isinstance(images, list) and images and isinstance(images[0], dict) and images[0].get("url"):
        return images[0]["url"], False

    image = result.get("image")
    if isinstance(image, dict) and image.get("url"):
        return image["url"], False

    output = result.get("output")
    if isinstance(output, str) and output:
        return output, False

    return None, False


@register("fal")
class FalAdapter(ProviderAdapter):
    """POST fal.run/{model}; the response body carries the result."""

    CREDENTIAL_HEADER = "X-Fal-API-Key"
    REQUIRES_API_KEY = False

    def __init__(
        self,
        api_key: str | None,
        session: requests.Session | None = None,
        request_id: str = "",
        media: MediaNormalizer | None = None,
    ):
        super().__init__(api_key, session=session, request_id=request_id)
        self.client = FalClient(api_key, session=session)
        self.media = media or MediaNormalizer(MediaClient(session=session))

    def submit(self, generation_input: GenerationInput) -> GenerationOutput:
        model_id = generation_input.model.id
        self._log(f"Generating with fal.ai: {model_id} "
                  f"(API key: {'provided' if self.api_key else 'not provided, rate-limited access'})")

        payload = build_payload(
            generation_input,
            lambda: self._input_mapping(model_id),
            default_image_field="image_url",
        )
        log_payload(self, payload)

        response = self.client.run(model_id, payload)
        hint = "Try again in a moment." if self.api_key else "Add an API key in settings for higher limits."
        raise_for_provider_status(response, generation_input.model.name, hint)

        result = parse_json(response) or {}
        media_url, is_video = find_media_url(result)
        if not media_url:
            self._log(f"No media URL found in fal.ai response: {list(result.keys())}", logging.ERROR)
            raise EmptyResponseError("No media URL in response")

        return GenerationOutput(outputs=[self.media.normalize(media_url, video_hint=is_video)])

    def _input_mapping(self, model_id: str) -> dict[str, str]:
        """Field mapping from the endpoint's openapi.json; empty when unavailable."""
        try:
            response = self.client.get_openapi(model_id)
        except TransportError as e:
            self._log(f"Schema fetch failed, using default field names: {e}", logging.WARNING)
            return {}
        if not response.ok:
            return {}

        param_map = map_inputs(input_property_names(parse_json(response)))
        self._log(f"Schema parameter mapping: {param_map}")
        return param_map
