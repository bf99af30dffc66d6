"""
===============================================================================
TARJETA CRC - domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    FileJob,
    FileRecord,
    UserJob,
    UserRecord,
    is_valid_store_id,
    parse_file_job,
    parse_user_job,
)
from .services import (
    FileRepository,
    JobQueue,
    SessionStore,
    ThumbnailGenerator,
    UserRepository,
    WelcomeNotifier,
)

__all__ = [
    "FileJob",
    "FileRecord",
    "UserJob",
    "UserRecord",
    "is_valid_store_id",
    "parse_file_job",
    "parse_user_job",
    "FileRepository",
    "JobQueue",
    "SessionStore",
    "ThumbnailGenerator",
    "UserRepository",
    "WelcomeNotifier",
]
