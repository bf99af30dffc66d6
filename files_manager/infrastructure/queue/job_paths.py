"""
===============================================================================
SUBSISTEMA: Infraestructura / Queue
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Rutas y Constantes de Jobs

Responsabilidades:
    - Centralizar nombres de colas y rutas "importables" de jobs.
    - Evitar strings mágicos dispersos.

Notas:
    - Las rutas deben ser importables por el worker de RQ.
    - Si se renombra/mueve un job, se actualiza acá y se valida en runtime.
===============================================================================
"""

from __future__ import annotations

FILE_QUEUE_NAME: str = "fileQueue"
USER_QUEUE_NAME: str = "userQueue"

PROCESS_FILE_JOB_PATH: str = "files_manager.worker.jobs.process_file_job"
PROCESS_USER_JOB_PATH: str = "files_manager.worker.jobs.process_user_job"
