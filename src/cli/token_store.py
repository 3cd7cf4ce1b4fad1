"""Sesión local de la CLI (token bearer + email).

El cliente de la API nunca persiste tokens; guardar, leer e invalidar la sesión
es responsabilidad de este llamador.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from core.config import get_user_config_dir

logger = logging.getLogger(__name__)


def default_token_path() -> Path:
    return get_user_config_dir() / "session.json"


class StoredSession(BaseModel):
    access_token: str = Field(..., min_length=1)
    email: str | None = None


class TokenStore:
    """Archivo JSON con la sesión activa (permisos 0600 cuando el SO lo permite)."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_token_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StoredSession | None:
        if not self._path.exists():
            return None
        try:
            return StoredSession.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (ValidationError, OSError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, exc)
            return None

    def save(self, session: StoredSession) -> Path:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(session.model_dump(mode="json"), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        try:
            os.chmod(self._path, 0o600)
        except OSError:
            # Windows / FS sin permisos POSIX.
            pass
        return self._path

    def clear(self) -> bool:
        existed = self._path.exists()
        self._path.unlink(missing_ok=True)
        return existed
