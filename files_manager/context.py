"""
===============================================================================
TARJETA CRC - files_manager/context.py (Contexto por request / job)
===============================================================================

Responsabilidades:
  - Mantener contexto “request-scoped” usando ContextVars (async-safe).
  - Permitir correlación de logs/métricas sin pasar parámetros por todo el stack.
  - Proveer helpers mínimos: set_*(), get_context_dict(), clear_context().

Colaboradores:
  - crosscutting.middleware: setea request_id/method/path al inicio del request.
  - crosscutting.logger: enriquece logs leyendo get_context_dict().
  - worker.jobs: setea job_id/queue por job y limpia contexto al finalizar.

Restricciones:
  - Solo tipos primitivos (str) para serialización segura.
  - Defaults vacíos ("") para evitar None y simplificar JSON.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

# Identificador de request (X-Request-Id o UUID generado).
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Metadatos HTTP básicos para logs (método y path).
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")

# Metadatos de job (worker RQ).
job_id_var: ContextVar[str] = ContextVar("job_id", default="")
queue_var: ContextVar[str] = ContextVar("queue", default="")

_CTX_REQUEST_ID: Final[str] = "request_id"
_CTX_METHOD: Final[str] = "method"
_CTX_PATH: Final[str] = "path"
_CTX_JOB_ID: Final[str] = "job_id"
_CTX_QUEUE: Final[str] = "queue"


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """
    Setea el contexto mínimo del request.

    Regla:
      - Strings vacíos significan “no disponible”.
    """
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def set_job_context(*, job_id: str = "", queue: str = "") -> None:
    """Setea el contexto de un job del worker."""
    job_id_var.set(job_id or "")
    queue_var.set(queue or "")


def get_context_dict() -> dict[str, str]:
    """Devuelve el contexto actual como dict, omitiendo claves vacías."""
    ctx: dict[str, str] = {}

    if val := request_id_var.get():
        ctx[_CTX_REQUEST_ID] = val
    if val := http_method_var.get():
        ctx[_CTX_METHOD] = val
    if val := http_path_var.get():
        ctx[_CTX_PATH] = val
    if val := job_id_var.get():
        ctx[_CTX_JOB_ID] = val
    if val := queue_var.get():
        ctx[_CTX_QUEUE] = val

    return ctx


def clear_context() -> None:
    """
    Limpia el contexto al final del request/job.

    Importante:
      - Evita “filtración de contexto” entre requests/jobs del mismo worker.
    """
    request_id_var.set("")
    http_method_var.set("")
    http_path_var.set("")
    job_id_var.set("")
    queue_var.set("")
