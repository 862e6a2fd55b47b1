"""Download generated media and input images."""

import requests

from .base import HTTPClient


class MediaClient(HTTPClient):
    """Plain GETs against provider CDNs (no auth)."""

    def download(self, url: str) -> requests.Response:
        return self._request("GET", url)
