"""Shared fixtures: fabricated credentials and a scripted upstream."""

from collections.abc import Callable
from contextlib import contextmanager
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, DeezerSettings, LastfmSettings, SpotifySettings

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingLogger:
    """RequestLogger that keeps everything in memory."""

    def __init__(self) -> None:
        self.exchanges: list[tuple[str, int, str | None]] = []
        self.forwards: list[dict[str, Any]] = []
        self.warnings: list[tuple[str, str]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_exchange(self, provider: str, status: int, *, user_name: str | None = None) -> None:
        self.exchanges.append((provider, status, user_name))

    def log_forward(
        self,
        gateway_method: str,
        status: int,
        headers: dict[str, str],
        *,
        body_bytes: int,
    ) -> None:
        self.forwards.append(
            {"method": gateway_method, "status": status, "headers": headers, "body_bytes": body_bytes}
        )

    def log_warning(self, route: str, message: str) -> None:
        self.warnings.append((route, message))

    def log_error(self, route: str, status: int, message: str) -> None:
        self.errors.append((route, status, message))


class ScriptedUpstream:
    """Mock transport handler that records every outbound request."""

    def __init__(self, handler: Handler | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_config(configured: bool = True) -> Config:
    if not configured:
        return Config()
    return Config(
        deezer=DeezerSettings(app_id="123456", app_secret="deezer-app-secret"),
        lastfm=LastfmSettings(api_key="lastfm-api-key", shared_secret="lastfm-shared-secret"),
        spotify=SpotifySettings(client_id="spotify-client-id"),
    )


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config() -> Config:
    return make_config()


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def bridge(logger):
    """Build a TestClient whose outbound calls go to ``handler``.

    Usage: ``with bridge(handler) as (client, upstream): ...``
    """
    @contextmanager
    def _bridge(handler: Handler | None = None, *, configured: bool = True):
        upstream = ScriptedUpstream(handler)
        app = create_app(make_config(configured), logger, transport=upstream.transport)
        with TestClient(app) as client:
            yield client, upstream

    return _bridge
