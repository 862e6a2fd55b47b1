"""Async (submit + poll) adapter for Replicate predictions."""

from typing import Any

import requests

from . import register
from .base import ProviderAdapter, build_payload, log_payload, raise_for_provider_status
from .media import MediaNormalizer
from .polling import JobPoller
from ..clients.base import parse_json
from ..clients.media import MediaClient
from ..clients.replicate import ReplicateClient
from ..errors import EmptyResponseError, JobCanceledError, ProviderError, RateLimitError
from ..models.generation import GenerationInput, GenerationOutput
from ..schema.mapping import input_property_names, map_inputs


@register("replicate")
class ReplicateAdapter(ProviderAdapter):
    """Create a prediction on the model's latest version, then poll it to completion."""

    CREDENTIAL_HEADER = "X-Replicate-API-Key"
    MISSING_KEY_MESSAGE = "Replicate API key not provided. Include X-Replicate-API-Key header."

    def __init__(
        self,
        api_key: str | None,
        session: requests.Session | None = None,
        request_id: str = "",
        poller: JobPoller | None = None,
        media: MediaNormalizer | None = None,
    ):
        super().__init__(api_key, session=session, request_id=request_id)
        self.client = ReplicateClient(api_key or "", session=session)
        self.poller = poller or JobPoller()
        self.media = media or MediaNormalizer(MediaClient(session=session))

    def submit(self, generation_input: GenerationInput) -> GenerationOutput:
        name = generation_input.model.name
        self._log(f"Generating with Replicate: {generation_input.model.id}")

        # 1. Latest version (+ its OpenAPI schema for field mapping)
        latest_version = self._get_latest_version(generation_input.model.id, name)
        version = latest_version.get("id")
        if not version:
            raise ProviderError("Model has no available version")

        # 2. Build input and create the prediction
        prediction_input = build_payload(
            generation_input,
            lambda: self._input_mapping(latest_version),
            default_image_field="image",
        )
        log_payload(self, prediction_input)

        response = self.client.create_prediction(version, prediction_input)
        raise_for_provider_status(response, name, "Try again in a moment.")
        prediction = parse_json(response) or {}
        if not prediction.get("id"):
            raise ProviderError(f"{name}: prediction response missing id")

        # 3. Poll until terminal
        prediction = self.poller.wait(prediction, self._fetch_prediction, label=name)

        status = prediction.get("status")
        if status == "failed":
            reason = prediction.get("error") or "Prediction failed"
            self._log(f"Replicate prediction failed: {reason}")
            raise ProviderError(f"{name}: {reason}")
        if status == "canceled":
            raise JobCanceledError(f"{name}: Prediction was canceled")

        # 4. Output is a URL or a list of URLs; the first one is the result
        output = prediction.get("output")
        urls = output if isinstance(output, list) else [output] if output else []
        if not urls or not urls[0]:
            raise EmptyResponseError("No output from prediction")

        return GenerationOutput(outputs=[self.media.normalize(urls[0])])

    def _get_latest_version(self, model_id: str, name: str) -> dict[str, Any]:
        response = self.client.get_model(model_id)
        if response.status_code == 429:
            raise RateLimitError(f"{name}: Rate limit exceeded. Try again in a moment.")
        if not response.ok:
            raise ProviderError(f"Failed to get model info: {response.status_code}")
        data = parse_json(response) or {}
        return data.get("latest_version") or {}

    def _input_mapping(self, latest_version: dict[str, Any]) -> dict[str, str]:
        param_map = map_inputs(input_property_names(latest_version.get("openapi_schema")))
        self._log(f"Schema parameter mapping: {param_map}")
        return param_map

    def _fetch_prediction(self, prediction_id: str) -> dict[str, Any]:
        response = self.client.get_prediction(prediction_id)
        if not response.ok:
            raise ProviderError(f"Failed to poll prediction: {response.status_code}")
        prediction = parse_json(response)
        if prediction is None:
            raise ProviderError("Failed to poll prediction: response is not a JSON object")
        return prediction
