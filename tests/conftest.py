"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test, no .env file)
  - Provide in-memory fakes for the user/file repositories and the store
  - Reset cached container singletons between tests

Collaborators:
  - pytest: Test framework
  - files_manager.domain: entities and ports
"""

import os
import sys
from pathlib import Path

import pytest
from bson import ObjectId

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_JSON", "false")

from files_manager.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from files_manager import container  # noqa: E402
from files_manager.domain.entities import FileRecord, UserRecord  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Fakes
# ============================================================================


class FakeUserRepository:
    """In-memory users collection keyed by ObjectId text."""

    def __init__(self) -> None:
        self.users: dict[str, UserRecord] = {}
        self.lookups: list[str] = []

    def find_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def find_by_credentials(self, email: str, password_digest: str) -> UserRecord | None:
        return next(
            (
                u
                for u in self.users.values()
                if u.email == email and u.password_digest == password_digest
            ),
            None,
        )

    def find_by_id(self, user_id: str) -> UserRecord | None:
        self.lookups.append(user_id)
        return self.users.get(user_id)

    def insert(self, email: str, password_digest: str) -> UserRecord:
        user = UserRecord(id=str(ObjectId()), email=email, password_digest=password_digest)
        self.users[user.id] = user
        return user

    def count(self) -> int:
        return len(self.users)


class FakeFileRepository:
    def __init__(self, files: list[FileRecord] | None = None) -> None:
        self.files = {f.id: f for f in (files or [])}
        self.lookups: list[tuple[str, str]] = []

    def find_for_owner(self, file_id: str, user_id: str) -> FileRecord | None:
        self.lookups.append((file_id, user_id))
        record = self.files.get(file_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    def count(self) -> int:
        return len(self.files)


class FakeStore:
    """Stand-in for MongoStoreConnector liveness/count surface."""

    def __init__(self, users: FakeUserRepository | None = None, *, alive: bool = True):
        self._users = users or FakeUserRepository()
        self.alive = alive
        self.files_count = 0

    def is_alive(self) -> bool:
        return self.alive

    def nb_users(self) -> int:
        return self._users.count()

    def nb_files(self) -> int:
        return self.files_count


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_container():
    container.reset_container()
    yield
    container.reset_container()


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def fake_store(user_repo: FakeUserRepository) -> FakeStore:
    return FakeStore(user_repo)


@pytest.fixture
def make_file_repo():
    return FakeFileRepository
