"""Root conftest: aislamiento de entorno y backend falso (httpx.MockTransport)."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.federation_api import FederationApiClient
from core.config import AppSettings

BASE_URL = "http://api.test"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Nada de .env reales ni config del usuario durante los tests."""

    for key in ("DOJO_ADMIN_API_BASE_URL", "DOJO_ADMIN_LOG_LEVEL", "DOJO_ADMIN_TOKEN_PATH"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


class FakeBackend:
    """Backend en memoria: rutas (método, path) -> respuesta; registra cada request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status, content=content)
            if json_body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=json_body)

        self._routes[(method, path)] = respond

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], Any]) -> None:
        self._routes[(method, path)] = handler

    def handler(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"Cannot {request.method} {request.url.path}"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_base_url=BASE_URL,
        http_timeout_seconds=5.0,
        token_path=tmp_path / "session.json",
    )


@pytest.fixture
def client(settings: AppSettings, backend: FakeBackend) -> FederationApiClient:
    return FederationApiClient.from_settings(settings, transport=backend.transport)
