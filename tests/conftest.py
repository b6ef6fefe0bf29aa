from __future__ import annotations

import json

import httpx
import pytest

from workable.clients.workable import WorkableClient
from workable.io.cache import CacheNamespace, InMemoryCache


def _json(status: int, payload, headers=None) -> httpx.Response:
    return httpx.Response(status, headers=headers, content=json.dumps(payload).encode())


class FakeWorkable:
    """Canned Workable API: /jobs and /jobs/<shortcode>, honouring ?state=draft."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.queued: list[httpx.Response] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.queued:
            return self.queued.pop(0)

        state = request.url.params.get("state", "")
        path = request.url.path
        if path == "/spi/v3/jobs":
            if state == "draft":
                return _json(200, {"jobs": [{"title": "draft job", "shortcode": "GROOV001"}]})
            return _json(200, {"jobs": [
                {"title": "Job 1", "shortcode": "GROOV001"},
                {"title": "Job 2", "shortcode": "GROOV002"},
            ]})
        if path.startswith("/spi/v3/jobs/"):
            shortcode = path.rsplit("/", 1)[-1]
            if state == "draft":
                return _json(200, {"title": "Draft Job x", "test": "full draft data", "id": 1, "shortcode": shortcode})
            return _json(200, {"title": "Job x", "test": "full data", "id": 1, "shortcode": shortcode})
        return _json(404, {"error": "Not found"})

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


class FakeSleep:
    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def api():
    return FakeWorkable()


@pytest.fixture
def sleeper():
    return FakeSleep()


@pytest.fixture
def namespace():
    return CacheNamespace(name="test", cache=InMemoryCache())


@pytest.fixture
def make_client(api, sleeper, namespace):
    def _make(handler=None, cache=None, clock=lambda: 1000.0):
        http_client = httpx.Client(
            base_url="https://example.workable.com/spi/v3/",
            transport=httpx.MockTransport(handler or api),
        )
        return WorkableClient(http_client, cache, namespace=namespace, sleep=sleeper, clock=clock)

    return _make
