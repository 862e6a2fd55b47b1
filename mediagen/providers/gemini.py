"""Direct-SDK adapter for Gemini image models."""

import base64
import binascii
import time

import requests
from google.genai import errors as genai_errors
from google.genai import types

from . import register
from .base import ProviderAdapter
from ..clients.gemini import GeminiClient
from ..clients.media import MediaClient
from ..config import GEMINI_API_KEY
from ..errors import (
    EmptyResponseError,
    MissingCredentialError,
    ModelRefusalError,
    ProviderError,
    RateLimitError,
    ValidationError,
)
from ..models.generation import GenerationInput, GenerationOutput, MediaOutput, ProviderModel
from ..models.request import GenerateRequest
from ..utils import is_http_url, sniff_image_mime, split_data_uri, to_data_uri

# Model key -> concrete Gemini model
GEMINI_MODELS: dict[str, tuple[str, str, tuple[str, ...]]] = {
    "nano-banana": (
        "gemini-2.5-flash-image",
        "Nano Banana",
        ("text-to-image", "image-to-image"),
    ),
    "nano-banana-pro": (
        "gemini-3-pro-image-preview",
        "Nano Banana Pro",
        ("text-to-image", "image-to-image", "resolution", "google-search"),
    ),
}


@register("gemini")
class GeminiAdapter(ProviderAdapter):
    """Single generate_content call with text + inline image parts."""

    CREDENTIAL_HEADER = "X-Gemini-API-Key"

    def __init__(
        self,
        api_key: str | None,
        session: requests.Session | None = None,
        request_id: str = "",
        client: GeminiClient | None = None,
        media_client: MediaClient | None = None,
    ):
        super().__init__(api_key, session=session, request_id=request_id)
        self.client = client or GeminiClient(api_key=api_key)
        self.media_client = media_client or MediaClient(session=session)

    @classmethod
    def resolve_api_key(cls, headers: dict[str, str]) -> str | None:
        # Caller key (from settings) takes precedence over the server key
        api_key = headers.get(cls.CREDENTIAL_HEADER.lower()) or GEMINI_API_KEY
        if not api_key:
            raise MissingCredentialError(
                "API key not configured. Add GEMINI_API_KEY to .env or send X-Gemini-API-Key header."
            )
        return api_key

    @classmethod
    def build_input(cls, request: GenerateRequest) -> GenerationInput:
        selected = request.selected_model
        key = selected.model_id if selected and selected.model_id in GEMINI_MODELS else request.model
        if key not in GEMINI_MODELS:
            raise ValidationError(f"Unknown Gemini model: {key}")
        model_id, name, capabilities = GEMINI_MODELS[key]

        parameters = dict(request.parameters)
        if request.aspect_ratio:
            parameters["aspectRatio"] = request.aspect_ratio
        if request.resolution:
            parameters["resolution"] = request.resolution
        if request.use_google_search:
            parameters["useGoogleSearch"] = True

        return GenerationInput(
            model=ProviderModel(id=model_id, name=name, provider="gemini", capabilities=capabilities),
            prompt=request.prompt,
            images=list(request.images),
            parameters=parameters,
        )

    def submit(self, generation_input: GenerationInput) -> GenerationOutput:
        model = generation_input.model
        self._log(f"Model: {model.name} -> {model.id}, images: {len(generation_input.images)}, "
                  f"prompt: {len(generation_input.prompt)} chars")

        parts: list[types.Part] = []
        if generation_input.prompt:
            parts.append(types.Part.from_text(text=generation_input.prompt))
        parts.extend(self._image_part(image, idx) for idx, image in enumerate(generation_input.images, 1))

        config = self.build_config(generation_input)

        start = time.monotonic()
        try:
            response = self.client.generate_content(model.id, parts, config)
        except genai_errors.APIError as e:
            if e.code == 429:
                raise RateLimitError("Rate limit reached. Please wait and try again.") from e
            raise ProviderError(f"{model.name}: {e.message or e}") from e
        self._log(f"Gemini API call completed in {(time.monotonic() - start) * 1000:.0f}ms")

        return GenerationOutput(outputs=[self._extract_image(response)])

    def build_config(self, generation_input: GenerationInput) -> types.GenerateContentConfig:
        """Generation config; resolution and search only where the model supports them."""
        model = generation_input.model
        params = generation_input.parameters

        image_config: dict[str, str] = {}
        if params.get("aspectRatio"):
            image_config["aspect_ratio"] = params["aspectRatio"]
        if model.supports("resolution") and params.get("resolution"):
            image_config["image_size"] = params["resolution"]

        tools = None
        if model.supports("google-search") and params.get("useGoogleSearch"):
            tools = [types.Tool(google_search=types.GoogleSearch())]

        return types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            image_config=types.ImageConfig(**image_config) if image_config else None,
            tools=tools,
        )

    def _image_part(self, image: str, idx: int) -> types.Part:
        """Inline part from a data URI, bare base64 string or http(s) URL."""
        if is_http_url(image):
            response = self.media_client.download(image)
            if not response.ok:
                raise ValidationError(f"Failed to download image {idx} from {image}: {response.status_code}")
            content_type = (response.headers.get("content-type") or "").split(";")[0].strip()
            data = response.content
            return types.Part.from_bytes(data=data, mime_type=content_type or sniff_image_mime(data))

        mime_type, payload = split_data_uri(image)
        try:
            data = base64.b64decode(payload)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f"Image {idx} is not valid base64") from e

        # No data URI header: detect the format from the bytes
        mime_type = mime_type or sniff_image_mime(data)
        self._log(f"Image {idx}: {mime_type}, {len(payload) / 1024:.2f}KB base64")
        return types.Part.from_bytes(data=data, mime_type=mime_type)

    def _extract_image(self, response: types.GenerateContentResponse) -> MediaOutput:
        """First inline image part; a text-only answer is a refusal."""
        candidates = response.candidates
        if not candidates:
            raise EmptyResponseError("No response from AI model")

        content = candidates[0].content
        parts = content.parts if content else None
        if not parts:
            raise EmptyResponseError("No content in response")

        for part in parts:
            if part.inline_data and part.inline_data.data:
                mime_type = part.inline_data.mime_type or "image/png"
                return MediaOutput(type="image", data=to_data_uri(part.inline_data.data, mime_type))

        for part in parts:
            if part.text:
                self._log("Model returned text instead of image")
                raise ModelRefusalError(f"Model returned text instead of image: {part.text[:200]}")

        raise EmptyResponseError("No image in response")
