"""
Name: Settings Tests
"""

import pytest
from pydantic import ValidationError

from files_manager.crosscutting.config import Settings

pytestmark = pytest.mark.unit


def test_defaults():
    settings = Settings(app_env="development")

    assert settings.mongo_url == "mongodb://localhost:27017"
    assert settings.db_database == "files_manager"
    assert settings.session_ttl_seconds == 86400
    assert settings.session_key_prefix == "auth_"
    assert settings.get_thumbnail_widths() == [500, 250, 100]
    assert settings.get_worker_queues() == ["fileQueue", "userQueue"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DB_HOST", "mongo")
    monkeypatch.setenv("DB_PORT", "27018")
    monkeypatch.setenv("THUMBNAIL_WIDTHS", "300, 50")

    settings = Settings()

    assert settings.mongo_url == "mongodb://mongo:27018"
    assert settings.get_thumbnail_widths() == [300, 50]


@pytest.mark.parametrize(
    "field,value",
    [
        ("session_ttl_seconds", 0),
        ("queue_retry_max_attempts", -1),
        ("queue_job_timeout_seconds", 0),
        ("thumbnail_widths", "500,abc"),
        ("thumbnail_widths", ""),
    ],
)
def test_invalid_values_fail_fast(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_test_env_detection():
    assert Settings(app_env="ci").is_test() is True
    assert Settings(app_env="production").is_production() is True
