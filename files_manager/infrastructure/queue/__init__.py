"""
Infraestructura / Queue

Exporta los adaptadores de cola (RQ y en memoria) y sus errores tipados.
"""

from .errors import QueueConfigurationError, QueueEnqueueError, QueueError
from .in_memory_queue import InMemoryJobQueue
from .job_paths import FILE_QUEUE_NAME, USER_QUEUE_NAME
from .rq_queue import RQJobQueue, RQQueueConfig

__all__ = [
    "FILE_QUEUE_NAME",
    "USER_QUEUE_NAME",
    "InMemoryJobQueue",
    "QueueConfigurationError",
    "QueueEnqueueError",
    "QueueError",
    "RQJobQueue",
    "RQQueueConfig",
]
