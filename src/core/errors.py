"""Taxonomía de errores del cliente de la API.

Por qué una sola familia:
- Todo fallo de una operación llega al llamador como exactamente un
  `ApiClientError` (mensaje legible + status HTTP opcional).
- Las subclases permiten ramificar por tipo de fallo sin inspeccionar texto;
  401/403/422/5xx comparten `TransportError` y se distinguen por `http_status`.
"""

from __future__ import annotations

import asyncio

from core.domain.models import NormalizedError


class ApiClientError(Exception):
    """Error normalizado: `message` + `http_status` (None si no hubo respuesta HTTP)."""

    def __init__(self, message: str, *, http_status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status

    @property
    def normalized(self) -> NormalizedError:
        return NormalizedError(message=self.message, http_status=self.http_status)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, http_status={self.http_status!r})"


class ConfigurationError(ApiClientError):
    """La URL base de la API no está configurada."""


class PreconditionError(ApiClientError):
    """Argumentos inválidos detectados antes de tocar la red (p.ej. token vacío)."""


class MissingTokenError(PreconditionError):
    """Operación protegida invocada sin token bearer."""


class TransportError(ApiClientError):
    """Respuesta HTTP fuera del rango 2xx."""

    def __init__(self, message: str, *, http_status: int) -> None:
        super().__init__(message, http_status=http_status)

    @property
    def is_unauthenticated(self) -> bool:
        return self.http_status == 401

    @property
    def is_forbidden(self) -> bool:
        return self.http_status == 403


class NetworkError(ApiClientError):
    """Fallo de conexión o timeout: no hubo respuesta HTTP."""


class ContractViolationError(ApiClientError):
    """Respuesta 2xx cuyo cuerpo no cumple el esquema esperado."""


class RequestCancelledError(ApiClientError, asyncio.CancelledError):
    """La tarea se canceló con la request en vuelo.

    Hereda de `asyncio.CancelledError` para que asyncio siga viendo la tarea
    como cancelada.

    Ojo: al ser también un `ApiClientError` (y por tanto un `Exception`), un
    `except Exception` o `except ApiClientError` la captura. Quien maneje
    errores del cliente debe capturarla antes y relanzarla para no tragarse
    la cancelación.
    """
