"""
===============================================================================
USE CASE: Status / Stats
===============================================================================

Responsibilities:
    - status: liveness de cache (session store) y store (Mongo), sin gating.
    - stats: conteos exactos de users/files al momento de la llamada.

Notas:
    - Un store caído en stats es ConnectivityError, nunca {"users": 0}.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol

from ...crosscutting.exceptions import ConnectivityError
from ...domain.services import SessionStore


class StoreLiveness(Protocol):
    def is_alive(self) -> bool:
        ...

    def nb_users(self) -> int:
        ...

    def nb_files(self) -> int:
        ...


def status_payload(*, sessions: SessionStore, store: StoreLiveness) -> dict[str, bool]:
    return {"cache_alive": bool(sessions.is_alive()), "store_alive": bool(store.is_alive())}


def stats_payload(*, store: StoreLiveness) -> dict[str, int]:
    if not store.is_alive():
        raise ConnectivityError("Store no disponible")
    return {"users": store.nb_users(), "files": store.nb_files()}
