# files_manager/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del servicio (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

Taxonomía
---------
- AuthorizationError: credenciales/token ausentes, inválidos o expirados.
- ValidationError: input de cliente inválido (campo faltante, email duplicado).
- NotFoundError: entidad referenciada ausente (en consumidores de jobs).
- ConnectivityError: store (Mongo/Redis) inutilizable. Distinto de "vacío".
- DatabaseError: fallo de escritura/consulta que no es de conectividad.
- JobValidationError: payload de job malformado (fatal para el intento).
- ThumbnailError: fallo parcial al derivar UN ancho de thumbnail.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  FilesManagerError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP o a fallo de job
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - worker/jobs.py (relanza para que RQ registre el fallo)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Estructura mínima para responder errores de forma consistente."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class FilesManagerError(Exception):
    """Base para errores internos del sistema (error_code + error_id + message)."""

    error_code: str = "FILES_MANAGER_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class AuthorizationError(FilesManagerError):
    """Credencial o token de sesión inválido. Nunca se reintenta."""

    error_code: str = "AUTHORIZATION_ERROR"

    def __init__(self, message: str = "Unauthorized", **kwargs):
        super().__init__(message, **kwargs)


class ValidationError(FilesManagerError):
    """Input de cliente inválido. Nunca se reintenta."""

    error_code: str = "VALIDATION_ERROR"


class NotFoundError(FilesManagerError):
    """Entidad referenciada ausente (o de otro dueño)."""

    error_code: str = "NOT_FOUND"


class ConnectivityError(FilesManagerError):
    """Conexión al store inutilizable."""

    error_code: str = "CONNECTIVITY_ERROR"


class DatabaseError(FilesManagerError):
    """Errores de DB que no son de conectividad (escritura rechazada, query)."""

    error_code: str = "DATABASE_ERROR"


class JobValidationError(FilesManagerError):
    """Payload de job malformado: falla el intento sin tocar el store."""

    error_code: str = "JOB_VALIDATION_ERROR"


class ThumbnailError(FilesManagerError):
    """Fallo parcial de un ancho de thumbnail (no falla el job)."""

    error_code: str = "THUMBNAIL_ERROR"

    def __init__(self, message: str, *, width: int, **kwargs):
        super().__init__(message, **kwargs)
        self.width = width
