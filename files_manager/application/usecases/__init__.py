"""
Casos de uso de la aplicación (productores, consultas y consumidores de jobs).
"""

from .create_user import CreateUserInput, CreateUserUseCase
from .get_current_user import GetCurrentUserUseCase
from .process_file_job import (
    DEFAULT_THUMBNAIL_WIDTHS,
    ProcessFileJobResult,
    ProcessFileJobUseCase,
    thumbnail_path,
)
from .process_user_job import ProcessUserJobUseCase
from .status import stats_payload, status_payload

__all__ = [
    "CreateUserInput",
    "CreateUserUseCase",
    "DEFAULT_THUMBNAIL_WIDTHS",
    "GetCurrentUserUseCase",
    "ProcessFileJobResult",
    "ProcessFileJobUseCase",
    "ProcessUserJobUseCase",
    "stats_payload",
    "status_payload",
    "thumbnail_path",
]
