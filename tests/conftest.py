"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from humanity_sdk.core.client import HumanityClient
from humanity_sdk.core.config import SdkConfig
from humanity_sdk.core.logging import ProtocolLogger

API_BASE = "https://api.humanity.org"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config() -> SdkConfig:
    """Create a minimal client configuration."""
    return SdkConfig(
        client_id="app_123",
        redirect_uri="https://app.example.com/callback",
    )


@pytest.fixture
def make_client(config: SdkConfig) -> Generator[Callable[..., tuple[HumanityClient, RecordingTransport]], None, None]:
    """Factory for a client backed by a recording mock transport."""
    http_clients: list[httpx.Client] = []

    def factory(handler: Handler, **kwargs: Any) -> tuple[HumanityClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        http_client = httpx.Client(transport=transport)
        http_clients.append(http_client)
        client = HumanityClient(
            kwargs.pop("config", config),
            http_client=http_client,
            protocol_logger=ProtocolLogger(),
            **kwargs,
        )
        return client, transport

    yield factory

    for http_client in http_clients:
        http_client.close()


def json_response(payload: Any, status_code: int = 200, headers: dict[str, str] | None = None) -> Handler:
    """Build a handler that always answers with the given JSON payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload, headers=headers)

    return handler
