"""
============================================================
TARJETA CRC - infrastructure/repositories/mongo_file_repo.py
============================================================
Class: MongoFileRepository

Responsibilities:
  - Re-leer registros de archivo para el pipeline de thumbnails.
  - Aplicar el chequeo de dueño DENTRO de la query (_id + userId).

Collaborators:
  - infrastructure.db.mongo.MongoStoreConnector
  - domain.entities.FileRecord

Notas:
  - El dueño del formato de `files` es el handler de upload (externo);
    acá solo se leen _id, userId, localPath, name, type.
============================================================
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from pymongo.errors import ConnectionFailure, PyMongoError

from ...crosscutting.exceptions import ConnectivityError, DatabaseError
from ...domain.entities import FileRecord, is_valid_store_id
from ..db.mongo import MongoStoreConnector


class MongoFileRepository:
    def __init__(self, store: MongoStoreConnector) -> None:
        self._store = store

    def find_for_owner(self, file_id: str, user_id: str) -> FileRecord | None:
        if not (is_valid_store_id(file_id) and is_valid_store_id(user_id)):
            return None

        collection = self._store.files
        try:
            doc = collection.find_one(
                {"_id": ObjectId(file_id), "userId": ObjectId(user_id)}
            )
        except ConnectionFailure as exc:
            raise ConnectivityError(
                "Store no disponible", original_error=exc
            ) from exc
        except PyMongoError as exc:
            raise DatabaseError("Falla al leer archivo", original_error=exc) from exc

        return _to_file(doc) if doc else None

    def count(self) -> int:
        return self._store.nb_files()


def _to_file(doc: dict[str, Any]) -> FileRecord:
    return FileRecord(
        id=str(doc["_id"]),
        user_id=str(doc.get("userId", "")),
        local_path=doc.get("localPath"),
        name=doc.get("name"),
        type=doc.get("type"),
    )
