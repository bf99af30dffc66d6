"""
============================================================
TARJETA CRC - infrastructure/repositories/mongo_user_repo.py
============================================================
Class: MongoUserRepository

Responsibilities:
  - Leer/escribir usuarios en la colección `users`.
  - Mapear documentos Mongo -> UserRecord (id como texto).
  - Traducir errores del driver: conectividad vs. falla de escritura.

Collaborators:
  - infrastructure.db.mongo.MongoStoreConnector
  - domain.entities.UserRecord

Notas:
  - Unicidad de email: chequeo previo en el caso de uso (no hay índice único).
  - Las lecturas son documentos únicos: atómicas en el store.
============================================================
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from pymongo.errors import ConnectionFailure, PyMongoError

from ...crosscutting.exceptions import ConnectivityError, DatabaseError
from ...domain.entities import UserRecord, is_valid_store_id
from ..db.mongo import MongoStoreConnector


class MongoUserRepository:
    def __init__(self, store: MongoStoreConnector) -> None:
        self._store = store

    def find_by_email(self, email: str) -> UserRecord | None:
        return self._find_one({"email": email})

    def find_by_credentials(
        self, email: str, password_digest: str
    ) -> UserRecord | None:
        return self._find_one({"email": email, "password": password_digest})

    def find_by_id(self, user_id: str) -> UserRecord | None:
        if not is_valid_store_id(user_id):
            return None
        return self._find_one({"_id": ObjectId(user_id)})

    def insert(self, email: str, password_digest: str) -> UserRecord:
        collection = self._store.users
        try:
            result = collection.insert_one(
                {"email": email, "password": password_digest}
            )
        except ConnectionFailure as exc:
            raise ConnectivityError(
                "Store no disponible al crear usuario", original_error=exc
            ) from exc
        except PyMongoError as exc:
            raise DatabaseError(
                "Error creating user.", original_error=exc
            ) from exc

        return UserRecord(
            id=str(result.inserted_id), email=email, password_digest=password_digest
        )

    def count(self) -> int:
        return self._store.nb_users()

    def _find_one(self, query: dict[str, Any]) -> UserRecord | None:
        collection = self._store.users
        try:
            doc = collection.find_one(query)
        except ConnectionFailure as exc:
            raise ConnectivityError(
                "Store no disponible", original_error=exc
            ) from exc
        except PyMongoError as exc:
            raise DatabaseError("Falla al leer usuario", original_error=exc) from exc
        return _to_user(doc) if doc else None


def _to_user(doc: dict[str, Any]) -> UserRecord:
    return UserRecord(
        id=str(doc["_id"]),
        email=doc.get("email", ""),
        password_digest=doc.get("password", ""),
    )
