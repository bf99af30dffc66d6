"""
===============================================================================
USE CASE: Create User (productor de userQueue)
===============================================================================

Business Goal:
    Registrar un usuario nuevo y disparar el pipeline de bienvenida.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateUserUseCase

Responsibilities:
    - Validar email/password presentes.
    - Chequear unicidad de email ANTES de insertar (case-sensitive).
    - Persistir solo el digest del password.
    - Encolar {"userId"} en userQueue DESPUÉS de la escritura durable.

Collaborators:
    - UserRepository: find_by_email / insert
    - JobQueue: enqueue_user_job
    - identity.auth_users.hash_password

Error Mapping:
    - ValidationError: "Missing email" / "Missing password" / "Already exist"
    - DatabaseError / ConnectivityError: falla de escritura (sin job vacío)
    - QueueEnqueueError: el usuario ya existe en el store; se propaga igual
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ...crosscutting.exceptions import ValidationError
from ...crosscutting.logger import logger
from ...domain.entities import UserRecord
from ...domain.services import JobQueue, UserRepository
from ...identity.auth_users import hash_password


@dataclass(frozen=True)
class CreateUserInput:
    email: str | None
    password: str | None


class CreateUserUseCase:
    def __init__(self, *, users: UserRepository, queue: JobQueue) -> None:
        self._users = users
        self._queue = queue

    def execute(self, input_data: CreateUserInput) -> UserRecord:
        if not input_data.email:
            raise ValidationError("Missing email")
        if not input_data.password:
            raise ValidationError("Missing password")

        if self._users.find_by_email(input_data.email) is not None:
            raise ValidationError("Already exist")

        user = self._users.insert(input_data.email, hash_password(input_data.password))
        logger.info("Usuario creado", extra={"user_id": user.id})

        self._queue.enqueue_user_job(user.id)
        return user
