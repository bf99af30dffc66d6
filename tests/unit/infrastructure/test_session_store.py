"""
Name: Session Store Tests

Responsibilities:
  - TTL boundaries on the in-memory backend (injectable clock)
  - Revocation and multiple live tokens per user
  - Redis backend translation of client calls and errors
"""

from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from files_manager.crosscutting.exceptions import ConnectivityError
from files_manager.infrastructure.sessions import (
    InMemorySessionBackend,
    RedisSessionBackend,
    TokenSessionStore,
)

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> TokenSessionStore:
    return TokenSessionStore(InMemorySessionBackend(clock=clock))


def test_token_resolves_for_whole_ttl_window(store, clock):
    token = store.issue("user-1", 60)

    assert store.resolve(token) == "user-1"
    clock.now += 59.999
    assert store.resolve(token) == "user-1"


def test_token_is_absent_at_expiry(store, clock):
    token = store.issue("user-1", 60)

    clock.now += 60
    assert store.resolve(token) is None
    clock.now -= 30
    # Una vez expirada, la entrada se descartó.
    assert store.resolve(token) is None


def test_resolve_does_not_extend_ttl(store, clock):
    token = store.issue("user-1", 10)
    for _ in range(5):
        clock.now += 1
        assert store.resolve(token) == "user-1"

    clock.now += 5
    assert store.resolve(token) is None


def test_revoke_then_resolve_is_absent(store):
    token = store.issue("user-1", 86400)

    store.revoke(token)

    assert store.resolve(token) is None


def test_revoke_is_idempotent(store):
    token = store.issue("user-1", 86400)

    store.revoke(token)
    store.revoke(token)
    store.revoke("never-issued")


def test_two_tokens_for_same_user_are_independent(store):
    first = store.issue("user-1", 86400)
    second = store.issue("user-1", 86400)

    assert first != second
    assert store.resolve(first) == "user-1"
    assert store.resolve(second) == "user-1"

    store.revoke(first)

    assert store.resolve(first) is None
    assert store.resolve(second) == "user-1"


def test_empty_token_never_resolves(store):
    assert store.resolve("") is None


def test_issue_rejects_non_positive_ttl(store):
    with pytest.raises(ValueError):
        store.issue("user-1", 0)


def test_keys_use_prefix_and_token():
    backend = MagicMock()
    store = TokenSessionStore(backend, token_factory=lambda: "abc")

    token = store.issue("user-1", 86400)

    assert token == "abc"
    backend.set_with_ttl.assert_called_once_with("auth_abc", "user-1", 86400)


def test_redis_backend_uses_setex_and_decodes():
    client = MagicMock()
    client.get.return_value = b"user-1"
    backend = RedisSessionBackend(client)

    backend.set_with_ttl("auth_t", "user-1", 86400)
    value = backend.get("auth_t")
    backend.delete("auth_t")

    client.setex.assert_called_once_with("auth_t", 86400, "user-1")
    client.delete.assert_called_once_with("auth_t")
    assert value == "user-1"


def test_redis_outage_is_connectivity_error_not_miss():
    client = MagicMock()
    client.get.side_effect = RedisConnectionError("down")
    store = TokenSessionStore(RedisSessionBackend(client))

    with pytest.raises(ConnectivityError):
        store.resolve("t")


def test_redis_liveness_reports_false_on_error():
    client = MagicMock()
    client.ping.side_effect = RedisConnectionError("down")

    assert RedisSessionBackend(client).is_alive() is False
