"""
===============================================================================
TARJETA CRC - domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (UserRecord, FileRecord, FileJob, UserJob)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Representar los payloads de jobs como variantes etiquetadas, con
      validación de campos requeridos en el borde del consumidor.
    - Mantener el contrato de wire de los jobs ({"fileId", "userId"}).

Colaboradores:
    - infrastructure.repositories: mapean documentos Mongo -> entidades.
    - infrastructure.queue: serializa FileJob/UserJob a payload.
    - worker.jobs: parsea payload -> FileJob/UserJob.

Principios:
    - Sin dependencias a Redis/FastAPI.
    - La forma de un identificador de store (ObjectId) se valida con bson,
      que es parte del contrato del store, no de la conexión.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from bson import ObjectId

from ..crosscutting.exceptions import JobValidationError

# Nombres de campo del wire (fijos).
FIELD_FILE_ID: str = "fileId"
FIELD_USER_ID: str = "userId"


def is_valid_store_id(value: Any) -> bool:
    """True si value es un ObjectId textual (24 hex) o un ObjectId."""
    if isinstance(value, ObjectId):
        return True
    return isinstance(value, str) and ObjectId.is_valid(value)


# ---------------------------------------------------------------------------
# Registros persistidos
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UserRecord:
    """Usuario persistido. El digest nunca sale hacia clientes."""

    id: str
    email: str
    password_digest: str

    def to_public_dict(self) -> dict[str, str]:
        return {"id": self.id, "email": self.email}


@dataclass(frozen=True, slots=True)
class FileRecord:
    """
    Vista mínima de un archivo que necesita el pipeline de thumbnails.

    El resto de los campos pertenecen al handler de upload (externo).
    """

    id: str
    user_id: str
    local_path: str | None = None
    name: str | None = None
    type: str | None = None


# ---------------------------------------------------------------------------
# Jobs (variantes etiquetadas)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileJob:
    """Job de post-procesamiento de archivo (thumbnails)."""

    file_id: str
    user_id: str
    kind: Literal["file"] = "file"

    def to_payload(self) -> dict[str, str]:
        return {FIELD_FILE_ID: self.file_id, FIELD_USER_ID: self.user_id}


@dataclass(frozen=True, slots=True)
class UserJob:
    """Job de post-procesamiento de usuario (bienvenida)."""

    user_id: str
    kind: Literal["user"] = "user"

    def to_payload(self) -> dict[str, str]:
        return {FIELD_USER_ID: self.user_id}


Job = FileJob | UserJob


def _required_id(payload: Mapping[str, Any], field_name: str) -> str:
    """Extrae un id requerido; ausente o malformado -> JobValidationError."""
    value = payload.get(field_name)
    if value is None or value == "":
        raise JobValidationError(f"Missing {field_name}")
    if not is_valid_store_id(value):
        raise JobValidationError(f"Invalid {field_name}")
    return str(value)


def parse_file_job(payload: Mapping[str, Any] | None) -> FileJob:
    """Valida {"fileId", "userId"} y construye FileJob.

    Se chequea userId antes que fileId.
    """
    data = payload or {}
    user_id = _required_id(data, FIELD_USER_ID)
    file_id = _required_id(data, FIELD_FILE_ID)
    return FileJob(file_id=file_id, user_id=user_id)


def parse_user_job(payload: Mapping[str, Any] | None) -> UserJob:
    """Valida {"userId"} y construye UserJob."""
    return UserJob(user_id=_required_id(payload or {}, FIELD_USER_ID))
