"""
Shared pytest fixtures and configuration.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from vantage_proxy.core.config import Settings
from vantage_proxy.main import create_app
from vantage_proxy.models.proxy import ProxyConfig


class FakeUpstream:
    """Records outbound requests and answers them with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.content: bytes = b"{}"
        self.content_type = "application/json"
        self.error: Exception | None = None

    def respond_json(self, payload, status_code: int = 200) -> None:
        self.status_code = status_code
        self.content = json.dumps(payload).encode()
        self.content_type = "application/json"

    def respond_text(self, text: str, status_code: int = 200) -> None:
        self.status_code = status_code
        self.content = text.encode()
        self.content_type = "text/plain"

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            content=self.content,
            headers={"content-type": self.content_type},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    """Settings with a test credential, isolated from any local .env file."""
    return Settings(_env_file=None, ALPHA_VANTAGE_API_KEY="TESTKEY", LOG_FILE=None)


@pytest.fixture
def proxy_config(settings):
    return ProxyConfig.from_settings(settings)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(settings, upstream):
    """TestClient running the app lifespan against the fake upstream."""
    app = create_app(settings, transport=upstream.transport)
    with TestClient(app) as test_client:
        yield test_client
