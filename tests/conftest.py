"""Shared test fixtures for TinySpeck."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from tinyspeck.adapter import TinySpeck
from tinyspeck.config import SpeckConfig
from tinyspeck.core.dispatcher import EventDispatcher
from tinyspeck.core.registry import EventRegistry
from tinyspeck.transport.web_api import WebApiClient


class Recorder:
    """A subscriber that remembers every message it receives."""

    def __init__(self, name: str = "recorder") -> None:
        self.__qualname__ = name
        self.received: list[dict[str, Any]] = []

    def __call__(self, message: dict[str, Any]) -> None:
        self.received.append(message)

    @property
    def count(self) -> int:
        return len(self.received)


@pytest.fixture
def recorder() -> Recorder:
    """Provide a fresh recording subscriber."""
    return Recorder()


@pytest.fixture
def make_recorder() -> Callable[..., Recorder]:
    """Factory fixture: build named recording subscribers."""
    return Recorder


@pytest.fixture
def registry() -> EventRegistry:
    """Provide an empty EventRegistry."""
    return EventRegistry()


@pytest.fixture
def dispatcher(registry: EventRegistry) -> EventDispatcher:
    """Provide a dispatcher with default rules wired to the test registry."""
    return EventDispatcher(registry)


@pytest.fixture
def speck_config() -> SpeckConfig:
    """Config that ignores any .env file and ambient environment."""
    return SpeckConfig(_env_file=None, api_base_url="https://slack.test/api/")


@pytest.fixture
def api_calls() -> list[httpx.Request]:
    """Requests captured by the mock Web API."""
    return []


@pytest.fixture
def make_api(api_calls: list[httpx.Request]) -> Callable[..., WebApiClient]:
    """Factory fixture: a WebApiClient backed by an httpx MockTransport.

    The handler receives each request and returns the JSON body to answer
    with; by default it echoes the form arguments as ``{"ok": true, "args": ...}``.
    """

    def _echo(request: httpx.Request) -> Any:
        args = dict(httpx.QueryParams(request.content.decode("utf-8")))
        return {"ok": True, "args": args}

    def _factory(
        handler: Callable[[httpx.Request], Any] = _echo,
        base_url: str = "https://slack.test/api/",
    ) -> WebApiClient:
        def _transport(request: httpx.Request) -> httpx.Response:
            api_calls.append(request)
            body = handler(request)
            if isinstance(body, httpx.Response):
                return body
            return httpx.Response(200, text=json.dumps(body))

        client = httpx.Client(transport=httpx.MockTransport(_transport))
        return WebApiClient(base_url, http_client=client)

    return _factory


@pytest.fixture
def speck(speck_config: SpeckConfig, make_api: Callable[..., WebApiClient]) -> TinySpeck:
    """Provide a TinySpeck adapter whose Web API is mocked."""
    return TinySpeck({"token": "xoxb-test"}, config=speck_config, api=make_api())


@pytest.fixture
def form_args() -> Callable[[httpx.Request], dict[str, str]]:
    """Decode the form body of a captured request."""

    def _decode(request: httpx.Request) -> dict[str, str]:
        return dict(httpx.QueryParams(request.content.decode("utf-8")))

    return _decode
