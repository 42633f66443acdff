"""Shared pytest fixtures for owm-client tests."""

from __future__ import annotations

from typing import Any, Dict, Generator, List, Optional

import pytest

from owm_client.clients.client import OWM
from owm_client.clients.pro import OWMPro
from owm_client.clients.proxy import ProxyConfig
from owm_client.clients.transport import HTTPResponse
from owm_client.config.settings import reset_settings

TEST_API_KEY = "test_api_key_TESTONLY"


class MockHTTPClient:
    """Records requests and replays queued responses from its factory."""

    def __init__(self, factory: "MockHTTPClientFactory", proxy: ProxyConfig):
        self.factory = factory
        self.proxy = proxy
        self.closed = False

    def get(self, url: str, params: Dict[str, str], timeout: float) -> HTTPResponse:
        self.factory.calls.append({
            "url": url,
            "params": dict(params),
            "timeout": timeout,
            "client": self,
        })
        if self.factory.responses:
            return self.factory.responses.pop(0)
        return HTTPResponse(status_code=200, reason="OK", body={})

    def close(self) -> None:
        self.closed = True


class MockHTTPClientFactory:
    """HTTP client factory handing out MockHTTPClients that share one call log."""

    def __init__(self, responses: Optional[List[HTTPResponse]] = None):
        self.responses: List[HTTPResponse] = list(responses or [])
        self.calls: List[Dict[str, Any]] = []
        self.clients: List[MockHTTPClient] = []

    def __call__(self, proxy: ProxyConfig) -> MockHTTPClient:
        client = MockHTTPClient(self, proxy)
        self.clients.append(client)
        return client

    def queue(self, body: Any = None, status_code: int = 200, reason: str = "OK", error_text: Optional[str] = None) -> None:
        self.responses.append(
            HTTPResponse(status_code=status_code, reason=reason, body=body, error_text=error_text)
        )

    @property
    def last_call(self) -> Dict[str, Any]:
        assert self.calls, "no request was made"
        return self.calls[-1]


@pytest.fixture
def http_factory() -> MockHTTPClientFactory:
    return MockHTTPClientFactory()


@pytest.fixture
def owm(http_factory: MockHTTPClientFactory) -> OWM:
    """Free tier client wired to the recording HTTP client factory."""
    return OWM(TEST_API_KEY, http_client_factory=http_factory)


@pytest.fixture
def owm_pro(http_factory: MockHTTPClientFactory) -> OWMPro:
    """Pro tier client wired to the recording HTTP client factory."""
    return OWMPro(TEST_API_KEY, http_client_factory=http_factory)


@pytest.fixture
def clean_env(monkeypatch, tmp_path) -> None:
    """Remove all OWM_ env vars and hide any local .env file."""
    env_vars = [
        "OWM_API_KEY",
        "OWM_TIER",
        "OWM_UNITS",
        "OWM_LANGUAGE",
        "OWM_ACCURACY",
        "OWM_PROXY_HOST",
        "OWM_PROXY_PORT",
        "OWM_PROXY_TYPE",
        "OWM_PROXY_USERNAME",
        "OWM_PROXY_PASSWORD",
        "OWM_TIMEOUT",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_env_minimal(monkeypatch, clean_env) -> None:
    """Set minimal required environment variables for testing."""
    monkeypatch.setenv("OWM_API_KEY", TEST_API_KEY)


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings singleton between tests to ensure isolation."""
    reset_settings()
    yield
    reset_settings()
