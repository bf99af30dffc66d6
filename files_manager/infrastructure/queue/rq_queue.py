"""
===============================================================================
ARCHIVO: infrastructure/queue/rq_queue.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Clase:
    RQJobQueue (Adapter)

Responsabilidades:
    - Implementar el puerto `JobQueue` usando RQ sobre Redis.
    - Mantener dos colas independientes: fileQueue y userQueue.
    - Encolar payloads inmutables ({"fileId","userId"} / {"userId"}).
    - Validar configuración (nombres + job paths importables) en modo fail-fast.

Colaboradores:
    - domain.services.JobQueue
    - job_paths.PROCESS_FILE_JOB_PATH / PROCESS_USER_JOB_PATH
    - errors.QueueConfigurationError / QueueEnqueueError
    - crosscutting.logger / crosscutting.metrics

Contrato de entrega:
    - RQ entrega cada job a un único worker por vez.
    - Reintentos: `Retry(max=N)` si N > 0; el worker re-lanza fallos para
      que RQ los registre (nunca se descartan en silencio).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from types import MappingProxyType
from typing import Any, Mapping

from rq import Queue, Retry

from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_job_enqueued
from ...domain.entities import FileJob, UserJob
from .errors import QueueConfigurationError, QueueEnqueueError
from .job_paths import (
    FILE_QUEUE_NAME,
    PROCESS_FILE_JOB_PATH,
    PROCESS_USER_JOB_PATH,
    USER_QUEUE_NAME,
)


@dataclass(frozen=True)
class RQQueueConfig:
    """Configuración del adaptador RQ.

    file_queue_name / user_queue_name:
        Nombres de las colas en Redis.
    retry_max_attempts:
        Reintentos automáticos si el worker falla (0 = sin reintentos).
    job_timeout_seconds:
        Timeout máximo de ejecución del job en el worker.
    result_ttl_seconds:
        Tiempo de vida del resultado del job en Redis.
    """

    file_queue_name: str = FILE_QUEUE_NAME
    user_queue_name: str = USER_QUEUE_NAME
    retry_max_attempts: int = 3
    job_timeout_seconds: int = 300
    result_ttl_seconds: int = 0


class RQJobQueue:
    """Adapter RQ para los pipelines asíncronos de archivos y usuarios."""

    def __init__(self, *, redis: Any, config: RQQueueConfig) -> None:
        self._config = _validate_config(config)

        # Fail-fast: el worker necesita importar los jobs.
        for path in (PROCESS_FILE_JOB_PATH, PROCESS_USER_JOB_PATH):
            if not _is_importable(path):
                raise QueueConfigurationError(
                    f"Job path no importable para RQ: {path}. "
                    "Revisar `infrastructure/queue/job_paths.py`."
                )

        self._queues: dict[str, Queue] = {
            self._config.file_queue_name: Queue(
                name=self._config.file_queue_name, connection=redis
            ),
            self._config.user_queue_name: Queue(
                name=self._config.user_queue_name, connection=redis
            ),
        }
        self._job_paths: dict[str, str] = {
            self._config.file_queue_name: PROCESS_FILE_JOB_PATH,
            self._config.user_queue_name: PROCESS_USER_JOB_PATH,
        }

        self._retry = None
        if self._config.retry_max_attempts > 0:
            self._retry = Retry(max=self._config.retry_max_attempts)

        logger.info(
            "RQ inicializada",
            extra={
                "queues": list(self._queues),
                "retry_max_attempts": self._config.retry_max_attempts,
                "job_timeout_seconds": self._config.job_timeout_seconds,
            },
        )

    def enqueue(self, queue_name: str, payload: Mapping[str, Any]) -> str:
        """Encola `payload` en `queue_name`.

        Contrato de serialización:
          - Se encola una copia (dict plano de strings) como único argumento:
            los nombres de campo viajan tal cual por el wire.
        """
        queue = self._queues.get(queue_name)
        if queue is None:
            raise QueueConfigurationError(f"Cola desconocida: {queue_name}")

        snapshot = MappingProxyType(dict(payload))

        try:
            job = queue.enqueue(
                self._job_paths[queue_name],
                args=(dict(snapshot),),
                retry=self._retry,
                job_timeout=self._config.job_timeout_seconds,
                result_ttl=self._config.result_ttl_seconds,
                description=f"{queue_name}:{','.join(sorted(snapshot))}",
            )
        except Exception as exc:
            logger.exception(
                "Error al encolar job", extra={"queue": queue_name}
            )
            raise QueueEnqueueError(
                f"No se pudo encolar en {queue_name}", original_error=exc
            ) from exc

        job_id = str(getattr(job, "id", "") or "")
        record_job_enqueued(queue_name)
        logger.info("Job encolado", extra={"queue": queue_name, "job_id": job_id})
        return job_id

    def enqueue_file_job(self, file_id: str, user_id: str) -> str:
        job = FileJob(file_id=str(file_id), user_id=str(user_id))
        return self.enqueue(self._config.file_queue_name, job.to_payload())

    def enqueue_user_job(self, user_id: str) -> str:
        job = UserJob(user_id=str(user_id))
        return self.enqueue(self._config.user_queue_name, job.to_payload())


# -----------------------------------------------------------------------------
# Helpers privados (módulo)
# -----------------------------------------------------------------------------


def _validate_config(config: RQQueueConfig) -> RQQueueConfig:
    file_queue_name = (config.file_queue_name or "").strip() or FILE_QUEUE_NAME
    user_queue_name = (config.user_queue_name or "").strip() or USER_QUEUE_NAME

    if file_queue_name == user_queue_name:
        raise QueueConfigurationError("fileQueue y userQueue deben ser distintas")
    if config.retry_max_attempts < 0:
        raise QueueConfigurationError("retry_max_attempts no puede ser negativo")
    if config.job_timeout_seconds <= 0:
        raise QueueConfigurationError("job_timeout_seconds debe ser > 0")
    if config.result_ttl_seconds < 0:
        raise QueueConfigurationError("result_ttl_seconds no puede ser negativo")

    return RQQueueConfig(
        file_queue_name=file_queue_name,
        user_queue_name=user_queue_name,
        retry_max_attempts=int(config.retry_max_attempts),
        job_timeout_seconds=int(config.job_timeout_seconds),
        result_ttl_seconds=int(config.result_ttl_seconds),
    )


def _is_importable(dotted_path: str) -> bool:
    """True si "modulo.func" se importa y es callable."""
    module_name, _, attr_name = dotted_path.rpartition(".")
    if not module_name or not attr_name:
        return False
    try:
        module = import_module(module_name)
    except ModuleNotFoundError:
        return False
    return callable(getattr(module, attr_name, None))
