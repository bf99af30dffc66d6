"""
USE CASE: Process User Job (consumidor de userQueue)

Re-lee el usuario y envía la bienvenida. Reenviar dos veces es tolerado:
no se deduplica.
"""

from __future__ import annotations

from ...crosscutting.exceptions import NotFoundError
from ...domain.entities import UserJob, UserRecord
from ...domain.services import UserRepository, WelcomeNotifier


class ProcessUserJobUseCase:
    def __init__(self, *, users: UserRepository, notifier: WelcomeNotifier) -> None:
        self._users = users
        self._notifier = notifier

    def execute(self, job: UserJob) -> UserRecord:
        user = self._users.find_by_id(job.user_id)
        if user is None:
            raise NotFoundError("User not found")
        self._notifier.send_welcome(user)
        return user
