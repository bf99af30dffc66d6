"""
USE CASE: Get Current User

Resuelve el registro del usuario autenticado (user_id viene del token).
Un token vivo cuyo usuario ya no existe se trata como no autorizado.
"""

from __future__ import annotations

from ...crosscutting.exceptions import AuthorizationError
from ...domain.entities import UserRecord
from ...domain.services import UserRepository


class GetCurrentUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: str) -> UserRecord:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise AuthorizationError()
        return user
