"""Replicate API client."""

from typing import Any

import requests

from .base import HTTPClient
from ..config import REPLICATE_API_BASE


class ReplicateClient(HTTPClient):
    """Client for Replicate models and predictions."""

    def __init__(self, api_key: str, session: requests.Session | None = None, base_url: str = REPLICATE_API_BASE):
        super().__init__(session=session)
        self.api_key = api_key
        self.base_url = base_url

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def get_model(self, model_id: str) -> requests.Response:
        """GET /models/{owner}/{name}. Carries latest_version with its OpenAPI schema."""
        owner, _, name = model_id.partition("/")
        return self._request("GET", f"{self.base_url}/models/{owner}/{name}")

    def create_prediction(self, version: str, prediction_input: dict[str, Any]) -> requests.Response:
        return self._request(
            "POST",
            f"{self.base_url}/predictions",
            json={"version": version, "input": prediction_input},
        )

    def get_prediction(self, prediction_id: str) -> requests.Response:
        return self._request("GET", f"{self.base_url}/predictions/{prediction_id}")
