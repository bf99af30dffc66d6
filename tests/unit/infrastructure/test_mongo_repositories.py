"""
Name: Mongo Repository Tests

Responsibilities:
  - Query shapes (owner check folded into the file query)
  - Document -> entity mapping
  - Driver error translation
"""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect, WriteError

from files_manager.crosscutting.exceptions import ConnectivityError, DatabaseError
from files_manager.infrastructure.repositories import (
    MongoFileRepository,
    MongoUserRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def store():
    return MagicMock()


class TestMongoFileRepository:
    def test_find_filters_by_file_and_owner(self, store):
        file_id, user_id = ObjectId(), ObjectId()
        store.files.find_one.return_value = {
            "_id": file_id,
            "userId": user_id,
            "localPath": "/tmp/files_manager/abc",
            "name": "img.png",
            "type": "image",
        }

        record = MongoFileRepository(store).find_for_owner(str(file_id), str(user_id))

        store.files.find_one.assert_called_once_with({"_id": file_id, "userId": user_id})
        assert record.id == str(file_id)
        assert record.user_id == str(user_id)
        assert record.local_path == "/tmp/files_manager/abc"

    def test_other_owner_is_not_found(self, store):
        store.files.find_one.return_value = None

        assert (
            MongoFileRepository(store).find_for_owner(str(ObjectId()), str(ObjectId()))
            is None
        )

    def test_malformed_id_skips_query(self, store):
        assert MongoFileRepository(store).find_for_owner("nope", str(ObjectId())) is None
        store.files.find_one.assert_not_called()

    def test_connection_failure_is_connectivity_error(self, store):
        store.files.find_one.side_effect = AutoReconnect("lost")

        with pytest.raises(ConnectivityError):
            MongoFileRepository(store).find_for_owner(str(ObjectId()), str(ObjectId()))


class TestMongoUserRepository:
    def test_credentials_lookup_uses_email_and_digest(self, store):
        user_id = ObjectId()
        store.users.find_one.return_value = {
            "_id": user_id,
            "email": "bob@dylan.com",
            "password": "digest",
        }

        user = MongoUserRepository(store).find_by_credentials("bob@dylan.com", "digest")

        store.users.find_one.assert_called_once_with(
            {"email": "bob@dylan.com", "password": "digest"}
        )
        assert user.id == str(user_id)
        assert user.to_public_dict() == {"id": str(user_id), "email": "bob@dylan.com"}

    def test_insert_returns_record_with_store_id(self, store):
        inserted = ObjectId()
        store.users.insert_one.return_value = MagicMock(inserted_id=inserted)

        user = MongoUserRepository(store).insert("bob@dylan.com", "digest")

        store.users.insert_one.assert_called_once_with(
            {"email": "bob@dylan.com", "password": "digest"}
        )
        assert user.id == str(inserted)

    def test_insert_write_failure_is_database_error(self, store):
        store.users.insert_one.side_effect = WriteError("rejected")

        with pytest.raises(DatabaseError, match="Error creating user."):
            MongoUserRepository(store).insert("bob@dylan.com", "digest")

    def test_find_by_invalid_id_skips_query(self, store):
        assert MongoUserRepository(store).find_by_id("123") is None
        store.users.find_one.assert_not_called()

    def test_count_delegates_to_store(self, store):
        store.nb_users.return_value = 7

        assert MongoUserRepository(store).count() == 7
