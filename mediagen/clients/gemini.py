"""Gemini image generation client (Nano Banana / Nano Banana Pro)."""

from google import genai
from google.genai import types


class GeminiClient:
    """Client for generating images via Gemini image models."""

    def __init__(self, api_key: str, client: genai.Client | None = None):
        self.client = client or genai.Client(api_key=api_key)

    def generate_content(
        self,
        model: str,
        parts: list[types.Part],
        config: types.GenerateContentConfig,
    ) -> types.GenerateContentResponse:
        """Send one multimodal user turn."""
        return self.client.models.generate_content(
            model=model,
            contents=[types.Content(role="user", parts=parts)],
            config=config,
        )
