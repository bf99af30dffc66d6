"""
Name: Worker Readiness Tests
"""

from unittest.mock import patch

import pytest

from files_manager.worker import worker_health

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "store_ok,redis_ok,expected",
    [(True, True, True), (False, True, False), (True, False, False)],
)
def test_readiness_payload(store_ok, redis_ok, expected):
    with patch.object(worker_health, "_check_store", return_value=store_ok), patch.object(
        worker_health, "_check_redis", return_value=redis_ok
    ):
        payload = worker_health.readiness_payload()

    assert payload["ok"] is expected
    assert payload["store"] == ("connected" if store_ok else "disconnected")
    assert payload["redis"] == ("connected" if redis_ok else "disconnected")


def test_cli_exit_code(capsys):
    with patch.object(
        worker_health, "readiness_payload", return_value={"ok": False}
    ), pytest.raises(SystemExit) as exc_info:
        worker_health.main()

    assert exc_info.value.code == 1
    assert '"ok": false' in capsys.readouterr().out
