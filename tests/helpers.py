"""Fakes for provider HTTP traffic."""

import json
from types import SimpleNamespace
from typing import Any

import requests


def make_response(
    status_code: int = 200,
    json_body: Any = None,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = content if content is not None else b""
    for name, value in (headers or {}).items():
        response.headers[name] = value
    return response


class FakeSession:
    """
    Stand-in for requests.Session routing on (method, url).

    A route value is a Response, an exception to raise, or a list of them
    consumed in order (the last one repeats).
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[SimpleNamespace] = []

    def add(self, method: str, url: str, *responses):
        self.routes[(method, url)] = list(responses)
        return self

    def calls_to(self, method: str, url: str) -> list[SimpleNamespace]:
        return [c for c in self.calls if c.method == method and c.url == url]

    def _dispatch(self, method: str, url: str, **kwargs):
        self.calls.append(SimpleNamespace(method=method, url=url, **kwargs))
        queue = self.routes.get((method, url))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {url}")
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return result

    def get(self, url, **kwargs):
        return self._dispatch("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._dispatch("POST", url, **kwargs)


class FakeClock:
    """Manually advanced clock; sleeping advances it."""

    def __init__(self, now: float = 1000.0):
        self.now = now
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds
