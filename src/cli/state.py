"""Estado compartido entre comandos (config, cliente y sesión).

Se construye una sola vez en el callback raíz de la CLI; los tests pueden
inyectar su propio `CliState` vía `CliRunner.invoke(..., obj=...)`.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from adapters.federation_api import FederationApiClient
from cli.token_store import TokenStore
from core.config import AppSettings
from core.interfaces.api import FederationApi


@dataclass
class CliState:
    settings: AppSettings
    api: FederationApi
    store: TokenStore
    transport: httpx.AsyncBaseTransport | None = None


def build_state(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CliState:
    settings = settings or AppSettings()
    return CliState(
        settings=settings,
        api=FederationApiClient.from_settings(settings, transport=transport),
        store=TokenStore(settings.token_path),
        transport=transport,
    )
