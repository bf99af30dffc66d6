"""
Name: HTTP Endpoint Tests

Responsibilities:
  - /status, /stats, /users, /users/me, /connect, /disconnect, /metrics
  - RFC7807 error mapping (401/400/503)
  - Session token via X-Token header or cookie

Notes:
  - Lifespan is not entered: the Mongo connector is replaced by a fake.
"""

import base64

import pytest
from fastapi.testclient import TestClient

from files_manager import container
from files_manager.api.main import app
from files_manager.application.usecases import (
    CreateUserUseCase,
    GetCurrentUserUseCase,
)
from files_manager.identity.auth_users import AuthService
from files_manager.infrastructure.queue import InMemoryJobQueue
from files_manager.infrastructure.sessions import InMemorySessionBackend, TokenSessionStore

pytestmark = pytest.mark.unit


def _basic(email: str, password: str) -> dict[str, str]:
    raw = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {raw}"}


@pytest.fixture
def sessions() -> TokenSessionStore:
    return TokenSessionStore(InMemorySessionBackend())


@pytest.fixture
def queue() -> InMemoryJobQueue:
    return InMemoryJobQueue()


@pytest.fixture
def client(user_repo, fake_store, sessions, queue):
    overrides = {
        container.get_store_connector: lambda: fake_store,
        container.get_session_store: lambda: sessions,
        container.get_auth_service: lambda: AuthService(users=user_repo, sessions=sessions),
        container.get_create_user_use_case: lambda: CreateUserUseCase(
            users=user_repo, queue=queue
        ),
        container.get_current_user_use_case: lambda: GetCurrentUserUseCase(users=user_repo),
    }
    app.dependency_overrides.update(overrides)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _create_and_connect(client) -> tuple[dict, str]:
    created = client.post("/users", json={"email": "bob@dylan.com", "password": "toto1234!"})
    assert created.status_code == 201
    token = client.get("/connect", headers=_basic("bob@dylan.com", "toto1234!")).json()["token"]
    return created.json(), token


class TestStatusAndStats:
    def test_status(self, client):
        response = client.get("/status")

        assert response.status_code == 200
        assert response.json() == {"cache_alive": True, "store_alive": True}

    def test_stats(self, client, fake_store):
        fake_store.files_count = 2
        client.post("/users", json={"email": "a@b.c", "password": "x"})

        assert client.get("/stats").json() == {"users": 1, "files": 2}

    def test_stats_with_dead_store_is_503(self, client, fake_store):
        fake_store.alive = False

        response = client.get("/stats")

        assert response.status_code == 503
        assert response.headers["content-type"].startswith("application/problem+json")
        assert response.json()["code"] == "SERVICE_UNAVAILABLE"

    def test_status_with_dead_store_still_answers(self, client, fake_store):
        fake_store.alive = False

        assert client.get("/status").json()["store_alive"] is False


class TestUsers:
    def test_create_user(self, client, queue):
        response = client.post("/users", json={"email": "bob@dylan.com", "password": "toto1234!"})

        body = response.json()
        assert response.status_code == 201
        assert set(body) == {"id", "email"}
        assert body["email"] == "bob@dylan.com"
        assert queue.pending("userQueue") == [{"userId": body["id"]}]

    @pytest.mark.parametrize(
        "payload,detail",
        [
            ({"password": "x"}, "Missing email"),
            ({"email": "bob@dylan.com"}, "Missing password"),
        ],
    )
    def test_missing_fields_are_400(self, client, payload, detail):
        response = client.post("/users", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == detail
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_duplicate_is_400(self, client):
        client.post("/users", json={"email": "bob@dylan.com", "password": "x"})

        response = client.post("/users", json={"email": "bob@dylan.com", "password": "y"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Already exist"

    def test_me_returns_public_fields(self, client):
        created, token = _create_and_connect(client)

        response = client.get("/users/me", headers={"X-Token": token})

        assert response.status_code == 200
        assert response.json() == created

    def test_me_accepts_cookie(self, client):
        created, token = _create_and_connect(client)
        client.cookies.set("session_token", token)

        assert client.get("/users/me").json() == created

    def test_me_without_token_is_401(self, client):
        response = client.get("/users/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"


class TestConnectDisconnect:
    def test_connect_returns_token(self, client, sessions):
        created, token = _create_and_connect(client)

        assert sessions.resolve(token) == created["id"]

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Bearer abc"},
            _basic("bob@dylan.com", "wrong"),
            _basic("nobody@dylan.com", "toto1234!"),
        ],
    )
    def test_connect_failures_are_uniform_401(self, client, headers):
        client.post("/users", json={"email": "bob@dylan.com", "password": "toto1234!"})

        response = client.get("/connect", headers=headers)

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    def test_disconnect_revokes(self, client, sessions):
        _, token = _create_and_connect(client)

        response = client.get("/disconnect", headers={"X-Token": token})

        assert response.status_code == 204
        assert response.content == b""
        assert sessions.resolve(token) is None
        assert client.get("/users/me", headers={"X-Token": token}).status_code == 401

    def test_disconnect_with_unknown_token_is_401(self, client):
        assert client.get("/disconnect", headers={"X-Token": "nope"}).status_code == 401


def test_metrics_exposition(client):
    client.get("/status")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "files_manager_requests_total" in response.text


def test_request_id_is_echoed(client):
    response = client.get("/status", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"


def test_create_user_increments_count_before_job_runs(client, queue):
    before = client.get("/stats").json()["users"]

    created = client.post("/users", json={"email": "bob@dylan.com", "password": "x"}).json()

    assert client.get("/stats").json()["users"] == before + 1
    assert queue.pending("userQueue") == [{"userId": created["id"]}]


class _CountingSessions:
    def __init__(self, inner: TokenSessionStore) -> None:
        self._inner = inner
        self.resolve_calls = 0

    def issue(self, user_id, ttl_seconds):
        return self._inner.issue(user_id, ttl_seconds)

    def resolve(self, token):
        self.resolve_calls += 1
        return self._inner.resolve(token)

    def revoke(self, token):
        self._inner.revoke(token)

    def is_alive(self):
        return self._inner.is_alive()


def test_disconnect_resolves_token_once(client, user_repo, sessions):
    _, token = _create_and_connect(client)
    counting = _CountingSessions(sessions)
    app.dependency_overrides[container.get_auth_service] = lambda: AuthService(
        users=user_repo, sessions=counting
    )

    response = client.get("/disconnect", headers={"X-Token": token})

    assert response.status_code == 204
    assert counting.resolve_calls == 1
    assert sessions.resolve(token) is None
