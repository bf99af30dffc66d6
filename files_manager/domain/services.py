"""
===============================================================================
TARJETA CRC - domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para sesiones, colas, thumbnails y notificaciones.
    - Definir contratos de persistencia de usuarios y archivos.
    - Proteger a application de detalles de Redis/RQ/Mongo/Pillow.

Colaboradores:
    - infrastructure/*: implementaciones concretas.
    - application/usecases, identity: consumen estos puertos.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from .entities import FileRecord, UserRecord


class SessionStore(Protocol):
    """Token de sesión -> user_id con expiración automática."""

    def issue(self, user_id: str, ttl_seconds: int) -> str:
        """Genera token nuevo y lo asocia a user_id por ttl_seconds."""
        ...

    def resolve(self, token: str) -> str | None:
        """user_id asociado, o None si falta/expiró. No renueva el TTL."""
        ...

    def revoke(self, token: str) -> None:
        """Borra el token (idempotente)."""
        ...

    def is_alive(self) -> bool:
        """Solo para reporte de liveness."""
        ...


class JobQueue(Protocol):
    """Colas durables con entrega at-least-once."""

    def enqueue(self, queue_name: str, payload: Mapping[str, Any]) -> str:
        """Encola payload en queue_name; retorna id del job."""
        ...

    def enqueue_file_job(self, file_id: str, user_id: str) -> str:
        ...

    def enqueue_user_job(self, user_id: str) -> str:
        ...


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> UserRecord | None:
        ...

    def find_by_credentials(self, email: str, password_digest: str) -> UserRecord | None:
        ...

    def find_by_id(self, user_id: str) -> UserRecord | None:
        ...

    def insert(self, email: str, password_digest: str) -> UserRecord:
        ...

    def count(self) -> int:
        ...


class FileRepository(Protocol):
    def find_for_owner(self, file_id: str, user_id: str) -> FileRecord | None:
        """Busca por (file_id, user_id): el chequeo de dueño va en la query."""
        ...

    def count(self) -> int:
        ...


class ThumbnailGenerator(Protocol):
    def generate(self, source_path: str, width: int) -> bytes:
        """Deriva un thumbnail de `width` px. Falla con ThumbnailError."""
        ...


class WelcomeNotifier(Protocol):
    def send_welcome(self, user: UserRecord) -> None:
        ...
