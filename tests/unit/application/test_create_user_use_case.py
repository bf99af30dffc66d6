"""
Name: Create User Use Case Tests

Responsibilities:
  - Validation messages and duplicate check
  - Digest persisted, never plaintext
  - User job enqueued only after the write succeeds
"""

from unittest.mock import MagicMock

import pytest

from files_manager.application.usecases import CreateUserInput, CreateUserUseCase
from files_manager.crosscutting.exceptions import DatabaseError, ValidationError
from files_manager.identity.auth_users import hash_password
from files_manager.infrastructure.queue import InMemoryJobQueue

pytestmark = pytest.mark.unit


@pytest.fixture
def queue() -> InMemoryJobQueue:
    return InMemoryJobQueue()


@pytest.fixture
def use_case(user_repo, queue) -> CreateUserUseCase:
    return CreateUserUseCase(users=user_repo, queue=queue)


def test_creates_user_and_enqueues_welcome(use_case, user_repo, queue, fake_store):
    before = fake_store.nb_users()

    user = use_case.execute(CreateUserInput(email="bob@dylan.com", password="toto1234!"))

    assert fake_store.nb_users() == before + 1
    assert user.to_public_dict() == {"id": user.id, "email": "bob@dylan.com"}
    assert user_repo.users[user.id].password_digest == hash_password("toto1234!")
    assert queue.pending("userQueue") == [{"userId": user.id}]


@pytest.mark.parametrize(
    "email,password,message",
    [
        (None, "pw", "Missing email"),
        ("", "pw", "Missing email"),
        ("bob@dylan.com", None, "Missing password"),
        ("bob@dylan.com", "", "Missing password"),
    ],
)
def test_missing_fields(use_case, queue, email, password, message):
    with pytest.raises(ValidationError, match=message):
        use_case.execute(CreateUserInput(email=email, password=password))

    assert queue.pending("userQueue") == []


def test_duplicate_email_is_rejected(use_case, user_repo, queue):
    use_case.execute(CreateUserInput(email="bob@dylan.com", password="a"))

    with pytest.raises(ValidationError, match="Already exist"):
        use_case.execute(CreateUserInput(email="bob@dylan.com", password="b"))

    assert user_repo.count() == 1
    assert len(queue.pending("userQueue")) == 1


def test_email_uniqueness_is_case_sensitive(use_case, user_repo):
    use_case.execute(CreateUserInput(email="bob@dylan.com", password="a"))
    use_case.execute(CreateUserInput(email="Bob@dylan.com", password="a"))

    assert user_repo.count() == 2


def test_insert_failure_propagates_without_enqueue(queue):
    users = MagicMock()
    users.find_by_email.return_value = None
    users.insert.side_effect = DatabaseError("Error creating user.")

    with pytest.raises(DatabaseError):
        CreateUserUseCase(users=users, queue=queue).execute(
            CreateUserInput(email="bob@dylan.com", password="pw")
        )

    assert queue.pending("userQueue") == []
