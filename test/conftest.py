"""
Shared fixtures for server tests.

Provides a scripted stand-in for the remote client, isolated settings, and a
server wired to both.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from graphlit_mcp.config import ConnectorSettings, Settings
from graphlit_mcp.connectors import FetchedBlob
from graphlit_mcp.server import create_server


class FakeGraphlit:
    """Remote client double.

    Every method returns the canned response registered under its name, or
    raises the registered failure. Calls are recorded in order.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Any]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ):
        self.responses = responses or {}
        self.failures = failures or {}
        self.calls: List[Tuple[str, tuple, dict]] = []
        self.closed = 0

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        async def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            if name in self.failures:
                raise self.failures[name]
            return self.responses.get(name)

        return method

    async def close(self) -> None:
        self.closed += 1

    def called(self, name: str) -> List[Tuple[tuple, dict]]:
        return [(args, kwargs) for called, args, kwargs in self.calls if called == name]


class FakeBlobFetcher:
    """Records image downloads and returns fixed bytes."""

    def __init__(self, data: bytes = b"\x89PNG\r\n", mime_type: str = "image/png"):
        self.blob = FetchedBlob(data=data, mime_type=mime_type)
        self.urls: List[str] = []

    async def __call__(self, url: str) -> FetchedBlob:
        self.urls.append(url)
        return self.blob


@pytest.fixture
def fake() -> FakeGraphlit:
    return FakeGraphlit()


@pytest.fixture
def blob_fetcher() -> FakeBlobFetcher:
    return FakeBlobFetcher()


@pytest.fixture
def config() -> Settings:
    return Settings(
        _env_file=None,
        organization_id="org-1",
        environment_id="env-1",
        jwt_secret="test-secret",
        enabled_tools=[],
    )


@pytest.fixture
def connector_config() -> ConnectorSettings:
    return ConnectorSettings(
        _env_file=None,
        slack_bot_token="xoxb-test",
        box_client_id="box-id",
        box_client_secret="box-secret",
        box_redirect_uri="https://localhost/box",
        box_refresh_token="box-refresh",
    )


@pytest.fixture
def server(config, connector_config, fake, blob_fetcher):
    return create_server(
        config,
        connector_config,
        client_factory=lambda: fake,
        blob_fetcher=blob_fetcher,
    )
