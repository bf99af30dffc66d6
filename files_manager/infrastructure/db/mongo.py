"""
===============================================================================
CRC CARD - infrastructure/db/mongo.py
===============================================================================

Componente:
  Persistent Store Connector (MongoDB, singleton por proceso)

Responsabilidades:
  - Abrir UNA conexión de larga vida al document store.
  - Exponer las colecciones `users` y `files`.
  - Reportar liveness con un flag sincrónico (sin callbacks de eventos).
  - Contar documentos en vivo (sin cache).

Ciclo de vida:
  UNINITIALIZED -> CONNECTING -> READY | FAILED
  close(): cualquier estado -> UNINITIALIZED

  - Un fallo de conexión deja el estado en FAILED y NO lanza: `is_alive()`
    devuelve False y cualquier acceso posterior falla con ConnectivityError,
    distinto de "cero registros".

Colaboradores:
  - pymongo.MongoClient
  - crosscutting.exceptions.ConnectivityError
  - api/main.py (lifespan) y worker/worker.py: init_store / close_store
===============================================================================
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Callable, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, PyMongoError

from ...crosscutting.exceptions import ConnectivityError, DatabaseError
from ...crosscutting.logger import logger
from .errors import StoreAlreadyInitializedError, StoreNotInitializedError

USERS_COLLECTION: str = "users"
FILES_COLLECTION: str = "files"


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class MongoStoreConnector:
    """Conexión compartida al document store con liveness consultable."""

    def __init__(
        self,
        url: str,
        database: str,
        *,
        server_selection_timeout_ms: int = 2000,
        client_factory: Callable[..., Any] = MongoClient,
    ) -> None:
        self._url = url
        self._database_name = database
        self._timeout_ms = server_selection_timeout_ms
        self._client_factory = client_factory

        self._client: Any = None
        self._db: Any = None
        self._state = ConnectionState.UNINITIALIZED
        self._lock = threading.Lock()

    @property
    def state(self) -> ConnectionState:
        return self._state

    def connect(self) -> bool:
        """
        Establece la conexión (una vez).

        Retorna True si quedó READY. Ante error deja FAILED y retorna False.
        """
        with self._lock:
            if self._state is ConnectionState.READY:
                return True

            self._state = ConnectionState.CONNECTING
            client = None
            try:
                client = self._client_factory(
                    self._url, serverSelectionTimeoutMS=self._timeout_ms
                )
                # El driver conecta lazy: forzamos un round-trip.
                client.admin.command("ping")
            except PyMongoError as exc:
                logger.error(
                    "MongoDB connection error",
                    extra={"database": self._database_name, "error": str(exc)},
                )
                if client is not None:
                    client.close()
                self._client = None
                self._db = None
                self._state = ConnectionState.FAILED
                return False

            self._client = client
            self._db = client[self._database_name]
            self._state = ConnectionState.READY
            logger.info(
                "MongoDB conectado", extra={"database": self._database_name}
            )
            return True

    def is_alive(self) -> bool:
        return self._state is ConnectionState.READY and self._client is not None

    def ping(self) -> bool:
        """Round-trip real contra el servidor (readiness)."""
        if not self.is_alive():
            return False
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError as exc:
            logger.warning("MongoDB ping falló", extra={"error": str(exc)})
            return False

    # ------------------------------------------------------------------
    # Colecciones
    # ------------------------------------------------------------------

    def collection(self, name: str) -> Collection:
        if not self.is_alive():
            raise ConnectivityError(
                f"Store no disponible (estado: {self._state.value})"
            )
        return self._db[name]

    @property
    def users(self) -> Collection:
        return self.collection(USERS_COLLECTION)

    @property
    def files(self) -> Collection:
        return self.collection(FILES_COLLECTION)

    def nb_users(self) -> int:
        return self._count(USERS_COLLECTION)

    def nb_files(self) -> int:
        return self._count(FILES_COLLECTION)

    def _count(self, name: str) -> int:
        collection = self.collection(name)
        try:
            return int(collection.count_documents({}))
        except ConnectionFailure as exc:
            raise ConnectivityError(
                f"No se pudo contar '{name}'", original_error=exc
            ) from exc
        except PyMongoError as exc:
            raise DatabaseError(
                f"Falla al contar '{name}'", original_error=exc
            ) from exc

    def close(self) -> None:
        """Cierra la conexión (idempotente)."""
        with self._lock:
            if self._client is not None:
                self._client.close()
            self._client = None
            self._db = None
            self._state = ConnectionState.UNINITIALIZED


# -----------------------------------------------------------------------------
# Singleton de proceso
# -----------------------------------------------------------------------------

_store: Optional[MongoStoreConnector] = None
_store_lock = threading.Lock()


def init_store(
    url: str,
    database: str,
    *,
    server_selection_timeout_ms: int = 2000,
) -> MongoStoreConnector:
    """
    Inicializa el connector (una vez por proceso) e intenta conectar.

    Un fallo de conexión NO lanza: queda registrado en el estado.
    """
    global _store

    with _store_lock:
        if _store is not None:
            raise StoreAlreadyInitializedError("El store ya fue inicializado.")

        store = MongoStoreConnector(
            url,
            database,
            server_selection_timeout_ms=server_selection_timeout_ms,
        )
        store.connect()
        _store = store
        return _store


def get_store() -> MongoStoreConnector:
    if _store is None:
        raise StoreNotInitializedError(
            "Store no inicializado. Llamar init_store() primero."
        )
    return _store


def close_store() -> None:
    """Cierra el connector (idempotente)."""
    global _store

    with _store_lock:
        if _store is not None:
            logger.info("Cerrando conexión MongoDB")
            try:
                _store.close()
            finally:
                _store = None


def reset_store() -> None:
    """Reset para tests."""
    global _store

    with _store_lock:
        _store = None
