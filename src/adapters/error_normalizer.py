"""Normalización de respuestas de error del backend.

Una sola implementación para todas las operaciones: cualquier respuesta no-2xx
se convierte en un `TransportError` con mensaje legible y el status original.

Formas de cuerpo reconocidas:
- `{"message": "texto"}`            -> "texto"
- `{"message": ["a", "b"]}`         -> "a, b" (validación multi-campo)
- `"texto"` (JSON string suelto)    -> "texto"
Cualquier otra cosa (vacío, HTML, JSON sin `message`) deja el mensaje por defecto.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_HTTP_ERROR_TEMPLATE = "HTTP error {status} while communicating with the API."


def default_error_message(status: int) -> str:
    return DEFAULT_HTTP_ERROR_TEMPLATE.format(status=status)


def extract_error_message(payload: Any) -> str | None:
    """Devuelve el mensaje del cuerpo de error ya parseado, o None si no hay uno usable."""

    if isinstance(payload, str):
        return payload or None
    if not isinstance(payload, dict):
        return None

    message = payload.get("message")
    if isinstance(message, str):
        return message or None
    if isinstance(message, list) and message and all(isinstance(m, str) for m in message):
        return ", ".join(message)
    return None


def normalize_error_response(response: httpx.Response) -> TransportError:
    """Construye el error normalizado para una respuesta no-2xx.

    Nunca lanza: si el cuerpo no es JSON se conserva el mensaje por defecto.
    """

    status = response.status_code
    message = default_error_message(status)

    try:
        payload = response.json()
    except ValueError as exc:
        # JSONDecodeError y UnicodeDecodeError son ValueError.
        logger.warning("Could not parse error body for HTTP %s: %s", status, exc)
        payload = None
    except RecursionError:
        logger.warning("Could not parse error body for HTTP %s: JSON nested too deeply", status)
        payload = None

    extracted = extract_error_message(payload)
    if extracted is not None:
        message = extracted

    return TransportError(message, http_status=status)
