"""
===============================================================================
TARJETA CRC - worker/jobs.py (Jobs RQ: consumidores de fileQueue / userQueue)
===============================================================================

Responsabilidades:
  - Definir entrypoints de jobs ejecutados por RQ (uno por cola).
  - Validar el payload en el borde (variante etiquetada) antes de tocar el store.
  - Construir el caso de uso con dependencias inyectadas desde el contenedor.
  - Emitir logs/métricas con contexto de job consistente.
  - Garantizar limpieza de contexto al finalizar (éxito o fallo).

Contrato de fallas:
  - Payload inválido, entidad ausente o cualquier excepción: se loguea,
    se cuenta y se RE-LANZA para que RQ registre el fallo y aplique retries.
  - Fallos por ancho de thumbnail no llegan acá (los absorbe el caso de uso).

Colaboradores:
  - domain.entities.parse_file_job / parse_user_job
  - container.get_process_file_job_use_case / get_process_user_job_use_case
  - crosscutting.metrics (record_worker_processed/failed, observe_worker_duration)
  - context (set_job_context, clear_context)
===============================================================================
"""

from __future__ import annotations

import time
from typing import Any, Callable, Mapping

from rq import get_current_job

from ..container import (
    get_process_file_job_use_case,
    get_process_user_job_use_case,
)
from ..context import clear_context, set_job_context
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import (
    observe_worker_duration,
    record_worker_failed,
    record_worker_processed,
)
from ..domain.entities import parse_file_job, parse_user_job


def _run(queue_name: str, payload: Mapping[str, Any] | None, handler: Callable[[], Any]) -> Any:
    job = get_current_job()
    job_id = str(getattr(job, "id", "") or "")
    set_job_context(job_id=job_id, queue=queue_name)

    start = time.perf_counter()
    status = "UNKNOWN"

    try:
        logger.info("Worker job iniciado", extra={"job_id": job_id, "queue": queue_name})
        result = handler()
        status = "COMPLETED"
        return result
    except Exception as exc:
        status = "FAILED"
        logger.exception(
            "Worker job falló con excepción",
            extra={
                "job_id": job_id,
                "queue": queue_name,
                "payload_fields": sorted((payload or {}).keys()),
                "error": str(exc),
            },
        )
        raise
    finally:
        duration = time.perf_counter() - start
        record_worker_processed(queue_name, status)
        if status == "FAILED":
            record_worker_failed(queue_name)
        observe_worker_duration(queue_name, duration)

        logger.info(
            "Worker job finalizado",
            extra={
                "job_id": job_id,
                "queue": queue_name,
                "status": status,
                "duration_seconds": round(duration, 3),
            },
        )
        clear_context()


def process_file_job(payload: Mapping[str, Any] | None) -> dict:
    """
    Job RQ de fileQueue: {"fileId", "userId"} -> thumbnails.

    El payload se valida antes de construir el caso de uso: un id
    malformado nunca genera un fetch al store.
    """

    def handler() -> dict:
        job = parse_file_job(payload)
        return get_process_file_job_use_case().execute(job).to_dict()

    return _run(get_settings().file_queue_name, payload, handler)


def process_user_job(payload: Mapping[str, Any] | None) -> dict:
    """Job RQ de userQueue: {"userId"} -> bienvenida."""

    def handler() -> dict:
        job = parse_user_job(payload)
        user = get_process_user_job_use_case().execute(job)
        return {"userId": user.id}

    return _run(get_settings().user_queue_name, payload, handler)


__all__ = ["process_file_job", "process_user_job"]
