from typing import Any, Dict, List, Optional

import httpx
import pytest

from howtohelp.cms import ContentAPIClient
from howtohelp.config import CMSConfig, Settings
from howtohelp.fetcher.http_client import AsyncHTTPClient

CMS_BASE_URL = "http://cms.test"


class FakeCMS:
    """Routes requests to canned responses and records every call."""

    def __init__(self) -> None:
        self.routes: List[Dict[str, Any]] = []
        self.requests: List[httpx.Request] = []

    def add(
        self,
        path: str,
        json: Any = None,
        status: int = 200,
        params: Optional[Dict[str, str]] = None,
        exc: Optional[Exception] = None,
        content: Optional[bytes] = None,
    ) -> None:
        self.routes.append({
            "path": path,
            "json": json,
            "status": status,
            "params": params or {},
            "exc": exc,
            "content": content,
        })

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for route in self.routes:
            if request.url.path != route["path"]:
                continue
            if any(request.url.params.get(k) != v for k, v in route["params"].items()):
                continue
            if route["exc"] is not None:
                raise route["exc"]
            if route["content"] is not None:
                return httpx.Response(route["status"], content=route["content"])
            return httpx.Response(route["status"], json=route["json"])
        return httpx.Response(
            404,
            json={"data": None, "error": {"status": 404, "name": "NotFoundError"}},
        )

    def calls_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def fake_cms() -> FakeCMS:
    return FakeCMS()


@pytest.fixture
def make_client(fake_cms: FakeCMS):
    def _make(revalidate_seconds: int = 0, cache=None, base_url: str = CMS_BASE_URL) -> ContentAPIClient:
        config = CMSConfig(base_url=base_url, revalidate_seconds=revalidate_seconds)
        http_client = AsyncHTTPClient(transport=httpx.MockTransport(fake_cms.handler))
        return ContentAPIClient(config, http_client=http_client, cache=cache)
    return _make


@pytest.fixture
def client(make_client) -> ContentAPIClient:
    return make_client()


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Settings:
    # Keep a developer's .env out of the tests.
    monkeypatch.chdir(tmp_path)
    return Settings(cms=CMSConfig(base_url=CMS_BASE_URL, revalidate_seconds=0))
