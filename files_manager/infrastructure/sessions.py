"""
============================================================
TARJETA CRC - infrastructure/sessions.py
============================================================
Module: Session Store (Facade + Backends)

Responsibilities:
  - Mapear token de sesión -> user_id con expiración automática (TTL).
  - Emitir tokens aleatorios (uuid4, 122 bits efectivos, forma textual).
  - Resolver sin renovar TTL (la lectura NO extiende la sesión).
  - Revocar de forma idempotente.
  - Reportar liveness del backend (solo para /status).

Key layout:
  - `auth_<token>` -> user_id (string), TTL fijado al emitir.

Collaborators:
  - identity.auth_users.AuthService (emite/resuelve/revoca).
  - Redis vía redis-py (SETEX / GET / DEL).
  - threading.Lock para el backend in-memory (tests / dev).

Policy / Design Notes:
  - A diferencia de un cache best-effort, un fallo de Redis NO es un miss:
    se propaga como ConnectivityError (un outage no es "token inválido").
  - Atomicidad: cada operación es de una sola clave.
  - TTL coherente:
      - En memoria: expira por timestamp (reloj inyectable).
      - En Redis: TTL nativo (SETEX).
============================================================
"""

from __future__ import annotations

import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Optional

from redis.exceptions import RedisError

from ..crosscutting.exceptions import ConnectivityError
from ..crosscutting.logger import logger

DEFAULT_KEY_PREFIX: str = "auth_"


# ============================================================
# Abstracción de backend
# ============================================================
class SessionBackend(ABC):
    """Contrato mínimo de un key-value con expiración por clave."""

    @abstractmethod
    def set_with_ttl(self, key: str, value: str, ttl_seconds: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def is_alive(self) -> bool:
        raise NotImplementedError


# ============================================================
# In-memory backend
# ============================================================
@dataclass(frozen=True, slots=True)
class SessionEntry:
    """
    Invariante:
      - expires_at es epoch seconds; la entrada NO resuelve en t >= expires_at.
    """

    value: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class InMemorySessionBackend(SessionBackend):
    """
    Backend en memoria para tests/dev.

    Nota:
      - NO comparte estado entre procesos (API y worker no lo ven igual).
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: Dict[str, SessionEntry] = {}
        self._lock = Lock()

    def set_with_ttl(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        with self._lock:
            self._entries[key] = SessionEntry(
                value=value, expires_at=self._clock() + ttl_seconds
            )

    def get(self, key: str) -> Optional[str]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(now):
                self._entries.pop(key, None)
                return None
            return entry.value

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def is_alive(self) -> bool:
        return True


# ============================================================
# Redis backend
# ============================================================
class RedisSessionBackend(SessionBackend):
    """
    Backend Redis (TTL nativo por clave).

    El cliente se inyecta desde el contenedor para compartir el pool de
    conexiones con las colas.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def set_with_ttl(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            self._client.setex(key, int(ttl_seconds), value)
        except RedisError as exc:
            raise ConnectivityError(
                "Session store no disponible", original_error=exc
            ) from exc

    def get(self, key: str) -> Optional[str]:
        try:
            value = self._client.get(key)
        except RedisError as exc:
            raise ConnectivityError(
                "Session store no disponible", original_error=exc
            ) from exc
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except RedisError as exc:
            raise ConnectivityError(
                "Session store no disponible", original_error=exc
            ) from exc

    def is_alive(self) -> bool:
        try:
            return bool(self._client.ping())
        except RedisError as exc:
            logger.warning("Redis no disponible", extra={"error": str(exc)})
            return False


# ============================================================
# Facade principal
# ============================================================
class TokenSessionStore:
    """
    Session Store sobre un SessionBackend.

    Invariantes:
      - Un token expirado o revocado nunca vuelve a resolver.
      - Varios tokens vivos por usuario están permitidos.
    """

    def __init__(
        self,
        backend: SessionBackend,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        token_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._backend = backend
        self._key_prefix = key_prefix
        self._token_factory = token_factory

    def _k(self, token: str) -> str:
        return f"{self._key_prefix}{token}"

    def issue(self, user_id: str, ttl_seconds: int) -> str:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        token = self._token_factory()
        self._backend.set_with_ttl(self._k(token), str(user_id), int(ttl_seconds))
        return token

    def resolve(self, token: str) -> Optional[str]:
        if not token:
            return None
        return self._backend.get(self._k(token))

    def revoke(self, token: str) -> None:
        if not token:
            return
        self._backend.delete(self._k(token))

    def is_alive(self) -> bool:
        return self._backend.is_alive()
