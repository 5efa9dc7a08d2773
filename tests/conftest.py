"""Shared fixtures: settings isolated from .env files and a mock-transport client factory."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from adapters.gamma_client import GammaClient
from core.config import AppSettings

HOST = "https://gamma.test"


class RecordingHandler:
    """Wraps a MockTransport handler and keeps every request it sees."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    for name in ("GAMMA_BASE_URL", "GAMMA_USER_AGENT", "GAMMA_HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    return AppSettings(_env_file=None)


@pytest.fixture
def make_client(settings: AppSettings):
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> tuple[GammaClient, RecordingHandler]:
        recorder = RecordingHandler(handler)
        client = GammaClient(HOST, settings=settings, transport=httpx.MockTransport(recorder))
        return client, recorder

    return _make


def json_response(body: str, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=body.encode("utf-8"))

    return _handler
