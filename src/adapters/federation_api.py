"""Cliente HTTP del backend de la federación.

Invariantes:
- La URL base se valida antes que cualquier otra cosa; sin ella no hay I/O.
- Las operaciones protegidas validan el token antes de abrir conexión.
- Una request por operación, sin reintentos ni caché.
- Todo fallo sale como un único `ApiClientError`; los no-2xx pasan siempre por
  `normalize_error_response`.
- El cliente nunca guarda tokens: el login lo devuelve y el llamador decide.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from adapters.error_normalizer import normalize_error_response
from adapters.http_client import bearer_headers, build_async_client
from core.config import AppSettings
from core.domain.models import (
    AuthToken,
    CreateUserResponse,
    Credentials,
    PagedResult,
    RegistrationRequest,
    UserRecord,
)
from core.errors import (
    ConfigurationError,
    ContractViolationError,
    MissingTokenError,
    NetworkError,
    PreconditionError,
    RequestCancelledError,
)
from core.interfaces.api import FederationApi

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

MISSING_BASE_URL_MESSAGE = "API base URL is not configured. Set DOJO_ADMIN_API_BASE_URL."
MISSING_TOKEN_MESSAGE = "Authorization token not provided."
INVALID_TOKEN_MESSAGE = "Authorization token contains characters not allowed in an HTTP header."
REGISTRATION_SUCCESS_MESSAGE = "User registration successful."

LOGIN_PATH = "/auth/login"
SIGNUP_PATH = "/auth/signup"
CREATE_USER_PROTECTED_PATH = "/auth/create-user-protected"
USERS_PATH = "/users"


class FederationApiClient(FederationApi):
    """Implementación httpx de `FederationApi`.

    La configuración llega por constructor (o `from_settings`) al arrancar el
    proceso; ninguna operación lee variables de entorno.
    """

    def __init__(
        self,
        base_url: str | None,
        *,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        cleaned = (base_url or "").strip().rstrip("/")
        self._base_url = cleaned or None
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "FederationApiClient":
        return cls(settings.api_base_url, settings=settings, transport=transport)

    @property
    def base_url(self) -> str | None:
        return self._base_url

    async def login(self, credentials: Credentials) -> AuthToken:
        self._preflight()
        response = await self._send("POST", LOGIN_PATH, json_body=credentials.model_dump(mode="json"))
        return self._parse(response, AuthToken)

    async def register(self, request: RegistrationRequest) -> str:
        self._preflight()
        await self._send("POST", SIGNUP_PATH, json_body=request.model_dump(mode="json", by_alias=True))
        return REGISTRATION_SUCCESS_MESSAGE

    async def create_user_as_admin(self, request: RegistrationRequest, token: str) -> CreateUserResponse:
        self._preflight(token, authenticated=True)
        response = await self._send(
            "POST",
            CREATE_USER_PROTECTED_PATH,
            token=token,
            json_body=request.model_dump(mode="json", by_alias=True),
        )
        return self._parse(response, CreateUserResponse)

    async def list_users_paged(
        self,
        token: str,
        page: int = 1,
        page_size: int = 10,
    ) -> PagedResult[UserRecord]:
        self._preflight(token, authenticated=True)
        if page < 1 or page_size < 1:
            raise PreconditionError(f"page and page_size must be >= 1 (got page={page}, page_size={page_size}).")

        response = await self._send(
            "GET",
            USERS_PATH,
            token=token,
            params={"page": page, "limit": page_size},
        )
        return self._parse(response, PagedResult[UserRecord])

    async def get_user_detail(self, token: str, user_id: int) -> UserRecord:
        self._preflight(token, authenticated=True)
        response = await self._send("GET", f"{USERS_PATH}/{int(user_id)}", token=token)
        return self._parse(response, UserRecord)

    def _preflight(self, token: str | None = None, *, authenticated: bool = False) -> None:
        if self._base_url is None:
            raise ConfigurationError(MISSING_BASE_URL_MESSAGE)
        if not authenticated:
            return
        if not token or not token.strip():
            raise MissingTokenError(MISSING_TOKEN_MESSAGE)
        # Va en una cabecera HTTP: solo ASCII imprimible (sin CR/LF).
        if not token.isascii() or not token.isprintable():
            raise PreconditionError(INVALID_TOKEN_MESSAGE)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = bearer_headers(token) if token else None
        logger.debug("%s %s", method, path)

        try:
            async with build_async_client(
                self._settings,
                base_url=self._base_url,
                extra_headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json_body, params=params)
        except asyncio.CancelledError as exc:
            raise RequestCancelledError(f"{method} {path} was cancelled before the API responded.") from exc
        except httpx.TimeoutException as exc:
            raise NetworkError(
                f"Timed out after {self._settings.http_timeout_seconds:g}s waiting for the API."
            ) from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"Could not reach the API: {exc}") from exc

        if response.is_success:
            return response

        logger.info("%s %s -> HTTP %s", method, path, response.status_code)
        raise normalize_error_response(response)

    @staticmethod
    def _parse(response: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            payload = response.json()
        except (ValueError, RecursionError) as exc:
            raise ContractViolationError(
                f"Unexpected response from the API: body is not valid JSON (HTTP {response.status_code}).",
                http_status=response.status_code,
            ) from exc

        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in exc.errors())
            raise ContractViolationError(
                f"Unexpected response from the API: invalid or missing fields ({fields}).",
                http_status=response.status_code,
            ) from exc
