"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y base_url para todas las operaciones.
- Facilita testeo: se inyecta un `httpx.MockTransport` en lugar de la red.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

JSON_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    base_url: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Un cliente por operación: sin estado compartido entre llamadas.
    - Timeout acotado siempre (el backend no garantiza responder).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        **JSON_HEADERS,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=base_url or "",
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def bearer_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
