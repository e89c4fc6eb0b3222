from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from datocms_cma.adapters.http_client import CmaHttpClient
from datocms_cma.client import Client
from datocms_cma.core.config import ClientSettings


def api_error(code: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "data": [
            {
                "id": "err-1",
                "type": "api_error",
                "attributes": {"code": code, "details": details or {}},
            }
        ]
    }


class FakeApi:
    """Router en memoria para `httpx.MockTransport`.

    Cada ruta guarda una cola de respuestas; la última se repite.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[tuple[int, Any, dict[str, str]]]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.routes.setdefault((method.upper(), path), []).append((status, json, headers or {}))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json=api_error("NOT_FOUND"))
        status, payload, headers = queue.pop(0) if len(queue) > 1 else queue[0]
        if payload is None:
            return httpx.Response(status, headers=headers)
        return httpx.Response(status, json=payload, headers=headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(
        _env_file=None,
        api_token="test-token",
        base_url="https://site-api.datocms.com",
        environment=None,
        max_retries=2,
        job_poll_interval_seconds=1.0,
        job_timeout_seconds=5.0,
    )


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def requester(settings: ClientSettings, fake_api: FakeApi, sleeps: list[float]) -> CmaHttpClient:
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return CmaHttpClient(
        settings,
        transport=httpx.MockTransport(fake_api.handler),
        sleep=_sleep,
    )


@pytest.fixture
def client(settings: ClientSettings, requester: CmaHttpClient) -> Client:
    return Client(settings, requester=requester)
