from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from runware_connector import config as config_module
from runware_connector.config import RUNWARE_API_KEY_ENV


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "_config", None)
    monkeypatch.setattr(config_module, "_config_path", "config.yaml")
    monkeypatch.delenv(RUNWARE_API_KEY_ENV, raising=False)


class RecordingTransport:
    """Collects every request and answers with a canned response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def body(self, index: int = 0) -> object:
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_client() -> Callable[..., tuple[httpx.Client, RecordingTransport]]:
    def _make(
        status_code: int = 200,
        payload: object | None = None,
        responder: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> tuple[httpx.Client, RecordingTransport]:
        if responder is None:

            def responder(_: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, json=payload if payload is not None else {})

        transport = RecordingTransport(responder)
        return httpx.Client(transport=httpx.MockTransport(transport)), transport

    return _make
