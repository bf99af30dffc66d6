"""
Name: Status / Stats Tests
"""

from unittest.mock import MagicMock

import pytest

from files_manager.application.usecases import stats_payload, status_payload
from files_manager.crosscutting.exceptions import ConnectivityError

pytestmark = pytest.mark.unit


def test_status_reports_both_flags(fake_store):
    sessions = MagicMock()
    sessions.is_alive.return_value = False

    assert status_payload(sessions=sessions, store=fake_store) == {
        "cache_alive": False,
        "store_alive": True,
    }


def test_stats_counts(fake_store, user_repo):
    user_repo.insert("a@b.c", "d")
    fake_store.files_count = 3

    assert stats_payload(store=fake_store) == {"users": 1, "files": 3}


def test_stats_on_dead_store_is_not_zero(fake_store):
    fake_store.alive = False

    with pytest.raises(ConnectivityError):
        stats_payload(store=fake_store)
