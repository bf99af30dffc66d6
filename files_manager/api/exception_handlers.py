"""
===============================================================================
TARJETA CRC - files_manager/api/exception_handlers.py (Manejo Centralizado)
===============================================================================

Responsabilidades:
  - Traducir errores tipados de la aplicación a respuestas HTTP RFC7807.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Mapping:
  - AuthorizationError  -> 401 UNAUTHORIZED ("Unauthorized")
  - ValidationError     -> 400 VALIDATION_ERROR
  - NotFoundError       -> 404 NOT_FOUND
  - ConnectivityError   -> 503 SERVICE_UNAVAILABLE
  - DatabaseError       -> 500 DATABASE_ERROR
  - QueueError          -> 500 QUEUE_ERROR
  - resto               -> 500 INTERNAL_ERROR

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: FilesManagerError y derivadas
  - infrastructure.queue.errors: QueueError
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import (
    AuthorizationError,
    ConnectivityError,
    DatabaseError,
    FilesManagerError,
    NotFoundError,
    ValidationError,
)
from ..crosscutting.logger import logger
from ..infrastructure.queue.errors import QueueError

_STATUS_BY_ERROR: tuple[tuple[type[FilesManagerError], int, ErrorCode], ...] = (
    (AuthorizationError, 401, ErrorCode.UNAUTHORIZED),
    (ValidationError, 400, ErrorCode.VALIDATION_ERROR),
    (NotFoundError, 404, ErrorCode.NOT_FOUND),
    (ConnectivityError, 503, ErrorCode.SERVICE_UNAVAILABLE),
    (DatabaseError, 500, ErrorCode.DATABASE_ERROR),
)


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _classify(exc: FilesManagerError) -> tuple[int, ErrorCode]:
    for error_type, status_code, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code, code
    return 500, ErrorCode.INTERNAL_ERROR


async def files_manager_error_handler(
    request: Request, exc: FilesManagerError
) -> JSONResponse:
    request_id = _request_id_from(request)
    status_code, code = _classify(exc)

    log = logger.error if status_code >= 500 else logger.info
    log(
        "Error de aplicación",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "status_code": status_code,
            "request_id": request_id,
        },
    )

    detail = exc.message
    if status_code == 500 and code == ErrorCode.INTERNAL_ERROR and get_settings().is_production():
        detail = "Error interno."

    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=detail,
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def queue_error_handler(request: Request, exc: QueueError) -> JSONResponse:
    logger.error(
        "Error de cola",
        extra={"code": exc.code, "request_id": _request_id_from(request)},
    )
    app_exc = AppHTTPException(
        status_code=500, code=ErrorCode.QUEUE_ERROR, detail=str(exc)
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Excepciones no tipadas: log completo + respuesta genérica."""
    request_id = _request_id_from(request)

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if not get_settings().is_production() else "Error interno."
    app_exc = AppHTTPException(
        status_code=500, code=ErrorCode.INTERNAL_ERROR, detail=detail
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException debe registrarse para respetar RFC7807.
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(FilesManagerError, files_manager_error_handler)
    app.add_exception_handler(QueueError, queue_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
