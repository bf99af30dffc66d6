"""
Notificación de bienvenida.

Por ahora el "envío" es una línea de log; el puerto WelcomeNotifier
permite reemplazarlo por un mailer real sin tocar el caso de uso.
"""

from __future__ import annotations

from ..crosscutting.logger import logger
from ..domain.entities import UserRecord


class LoggingWelcomeNotifier:
    def send_welcome(self, user: UserRecord) -> None:
        logger.info(f"Welcome {user.email}!", extra={"user_id": user.id})
