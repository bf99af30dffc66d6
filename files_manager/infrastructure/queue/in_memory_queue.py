"""
===============================================================================
ARCHIVO: infrastructure/queue/in_memory_queue.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Clase:
    InMemoryJobQueue

Responsabilidades:
    - Implementar `JobQueue` sin Redis (tests / APP_ENV=test).
    - Conservar orden FIFO por cola y permitir inspección (pending / pop).

Colaboradores:
    - domain.services.JobQueue
    - errors.QueueConfigurationError

Notas:
    - No hay consumidor: los tests invocan los jobs del worker a mano.
===============================================================================
"""

from __future__ import annotations

from collections import deque
from itertools import count
from threading import Lock
from typing import Any, Deque, Dict, List, Mapping, Tuple

from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_job_enqueued
from ...domain.entities import FileJob, UserJob
from .errors import QueueConfigurationError
from .job_paths import FILE_QUEUE_NAME, USER_QUEUE_NAME


class InMemoryJobQueue:
    def __init__(
        self,
        *,
        file_queue_name: str = FILE_QUEUE_NAME,
        user_queue_name: str = USER_QUEUE_NAME,
    ) -> None:
        self._file_queue_name = file_queue_name
        self._user_queue_name = user_queue_name
        self._queues: Dict[str, Deque[Tuple[str, Dict[str, Any]]]] = {
            file_queue_name: deque(),
            user_queue_name: deque(),
        }
        self._ids = count(1)
        self._lock = Lock()

    def enqueue(self, queue_name: str, payload: Mapping[str, Any]) -> str:
        if queue_name not in self._queues:
            raise QueueConfigurationError(f"Cola desconocida: {queue_name}")
        with self._lock:
            job_id = f"{queue_name}-{next(self._ids)}"
            self._queues[queue_name].append((job_id, dict(payload)))
        record_job_enqueued(queue_name)
        logger.debug("Job encolado (memoria)", extra={"queue": queue_name, "job_id": job_id})
        return job_id

    def enqueue_file_job(self, file_id: str, user_id: str) -> str:
        job = FileJob(file_id=str(file_id), user_id=str(user_id))
        return self.enqueue(self._file_queue_name, job.to_payload())

    def enqueue_user_job(self, user_id: str) -> str:
        return self.enqueue(self._user_queue_name, UserJob(user_id=str(user_id)).to_payload())

    def pending(self, queue_name: str) -> List[Dict[str, Any]]:
        """Copia de los payloads pendientes, en orden de llegada."""
        with self._lock:
            return [dict(payload) for _, payload in self._queues.get(queue_name, ())]

    def pop(self, queue_name: str) -> Dict[str, Any] | None:
        with self._lock:
            queue = self._queues.get(queue_name)
            if not queue:
                return None
            _, payload = queue.popleft()
            return payload
