"""fal.ai API client."""

from typing import Any

import requests

from .base import HTTPClient
from ..config import FAL_API_BASE, FAL_RUN_BASE


class FalClient(HTTPClient):
    """Client for fal.ai. The API key is optional (unauthenticated calls are rate limited)."""

    def __init__(
        self,
        api_key: str | None = None,
        session: requests.Session | None = None,
        run_base: str = FAL_RUN_BASE,
        api_base: str = FAL_API_BASE,
    ):
        super().__init__(session=session)
        self.api_key = api_key
        self.run_base = run_base
        self.api_base = api_base

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Key {self.api_key}"
        return headers

    def search_model(self, endpoint_id: str) -> requests.Response:
        """Model Search API with the OpenAPI document expanded."""
        return self._request(
            "GET",
            f"{self.api_base}/models",
            params={"endpoint_id": endpoint_id, "expand": "openapi-3.0"},
        )

    def get_openapi(self, model_id: str) -> requests.Response:
        return self._request("GET", f"{self.run_base}/{model_id}/openapi.json")

    def run(self, model_id: str, payload: dict[str, Any]) -> requests.Response:
        """Synchronous run: the response body holds the result."""
        return self._request("POST", f"{self.run_base}/{model_id}", json=payload)
