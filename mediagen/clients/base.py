"""Shared HTTP plumbing for provider clients."""

from typing import Any

import requests

from ..config import REQUEST_TIMEOUT
from ..errors import TransportError


class HTTPClient:
    """Thin wrapper over a requests session. Non-2xx responses are returned, not raised."""

    def __init__(self, session: requests.Session | None = None, timeout: float = REQUEST_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        return {}

    def _request(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Make a request, turning network failures into TransportError."""
        try:
            if method == "POST":
                return self.session.post(
                    url, json=json, params=params, headers=self._get_headers(), timeout=self.timeout
                )
            return self.session.get(url, params=params, headers=self._get_headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e


def parse_json(response: requests.Response) -> dict[str, Any] | None:
    """Response JSON object, or None when the body is not a JSON object."""
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None
