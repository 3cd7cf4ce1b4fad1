"""Contrato del cliente de la API de la federación.

Por qué Protocol:
- La CLI (y cualquier otro llamador) depende de esta abstracción, no de httpx.
- Permite sustituir el cliente real por un doble en tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import (
    AuthToken,
    CreateUserResponse,
    Credentials,
    PagedResult,
    RegistrationRequest,
    UserRecord,
)


@runtime_checkable
class FederationApi(Protocol):
    """Operaciones disponibles contra el backend.

    Reglas de diseño:
    - Cada operación hace como mucho una request y no reintenta.
    - Devuelve un valor validado o lanza exactamente un `ApiClientError`.
    """

    async def login(self, credentials: Credentials) -> AuthToken: ...

    async def register(self, request: RegistrationRequest) -> str: ...

    async def create_user_as_admin(self, request: RegistrationRequest, token: str) -> CreateUserResponse: ...

    async def list_users_paged(
        self,
        token: str,
        page: int = 1,
        page_size: int = 10,
    ) -> PagedResult[UserRecord]: ...

    async def get_user_detail(self, token: str, user_id: int) -> UserRecord: ...
