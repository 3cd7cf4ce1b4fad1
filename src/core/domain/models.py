"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Cada respuesta esperada del backend es un esquema explícito validado en el
  borde; un 2xx con campos obligatorios ausentes no produce objetos a medias.
- Los alias conservan los nombres del wire (`roles_id`, `totalRecords`, ...)
  para que `model_dump(by_alias=True)` devuelva el payload tal cual llegó.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, EmailStr, Field
from pydantic.config import ConfigDict

T = TypeVar("T")


class Role(IntEnum):
    """Roles de la federación (ids del backend)."""

    ADMIN = 1
    MASTER = 2
    REPRESENTATIVE = 3
    STUDENT = 4

    @classmethod
    def from_name(cls, name: str) -> "Role":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(r.name.lower() for r in cls)
            raise ValueError(f"Unknown role {name!r} (expected one of: {valid})") from None

    def label(self) -> str:
        return self.name.lower()


class Credentials(BaseModel):
    """Credenciales de login. Transitorias: nunca se persisten."""

    email: EmailStr = Field(
        ...,
        description="Correo del usuario.",
    )
    password: str = Field(
        ...,
        min_length=1,
        description="Contraseña en claro (solo viaja en el body de la request).",
    )


class RegistrationRequest(Credentials):
    """Credenciales + rol. Se usa tanto en el registro público como en el alta por admin."""

    model_config = ConfigDict(populate_by_name=True)

    role_id: int = Field(
        ...,
        ge=1,
        alias="roles_id",
        description="Id del rol asignado (ver `Role`).",
    )


class AuthToken(BaseModel):
    """Token bearer devuelto por el login. El llamador es su único dueño."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("access_token", "accessToken"),
        serialization_alias="access_token",
        description="JWT opaco para el header Authorization.",
    )


class CreateUserResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ok: bool
    status: int
    description: str


class UserRecord(BaseModel):
    """Usuario tal como lo devuelve el backend (lista y detalle).

    `extra="allow"`: los campos no modelados se conservan para devolver el
    registro sin recortes.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    email: str
    name: str | None = None
    lastname: str | None = None
    role: str | None = None
    birthdate: str | None = None
    url_image: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class PagedResult(BaseModel, Generic[T]):
    """Sobre paginado del backend. El orden de `data` es el del servidor."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    data: list[T] = Field(
        ...,
        description="Registros de la página actual (orden definido por el servidor).",
    )
    total_records: int = Field(..., ge=0, alias="totalRecords")
    current_page: int = Field(..., ge=1, alias="currentPage")
    total_pages: int = Field(..., ge=1, alias="totalPages")
    page_size: int = Field(..., ge=1, alias="pageSize")

    @property
    def items(self) -> list[T]:
        return self.data

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


class NormalizedError(BaseModel):
    """Forma serializable de cualquier fallo de la capa de cliente."""

    message: str
    http_status: int | None = None
