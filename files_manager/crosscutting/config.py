"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults for a local MongoDB + Redis setup (DB_HOST, DB_PORT, ...)

Collaborators:
  - api/main.py: reads settings for the store connector lifecycle
  - container.py: reads settings for Redis, queues and session TTL
  - worker/worker.py: reads settings for queue names and connections

Constraints:
  - Lives in crosscutting layer, NOT in domain/application
  - No business logic - pure configuration

Notes:
  - Singleton via lru_cache
  - List-like values are comma-separated strings (env friendly)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/production/test)
        log_level: Logging level (default: INFO)
        log_json: Emit JSON logs (default: True)
        port: HTTP port (default: 5000)
        db_host: MongoDB host (default: localhost)
        db_port: MongoDB port (default: 27017)
        db_database: MongoDB database name (default: files_manager)
        db_server_selection_timeout_ms: Driver server selection timeout
        redis_url: Redis connection string for sessions and queues
        session_ttl_seconds: Session token TTL (default: 24h)
        session_key_prefix: Redis key prefix for tokens (default: auth_)
        session_header: Header carrying the session token (default: X-Token)
        session_cookie_name: Cookie fallback for the session token
        file_queue_name: Queue for file post-processing (default: fileQueue)
        user_queue_name: Queue for user post-processing (default: userQueue)
        queue_retry_max_attempts: RQ retries per job (default: 3)
        queue_job_timeout_seconds: RQ job timeout (default: 300)
        queue_result_ttl_seconds: RQ result TTL (default: 0)
        thumbnail_widths: Comma-separated widths, largest first
        worker_queues: Comma-separated queues drained by the worker
    """

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # HTTP
    port: int = 5000

    # MongoDB
    db_host: str = "localhost"
    db_port: int = 27017
    db_database: str = "files_manager"
    db_server_selection_timeout_ms: int = 2000

    # Redis
    redis_url: str = "redis://localhost:6379/0"

    # Sessions
    session_ttl_seconds: int = 24 * 3600
    session_key_prefix: str = "auth_"
    session_header: str = "X-Token"
    session_cookie_name: str = "session_token"

    # Queues
    file_queue_name: str = "fileQueue"
    user_queue_name: str = "userQueue"
    queue_retry_max_attempts: int = 3
    queue_job_timeout_seconds: int = 300
    queue_result_ttl_seconds: int = 0

    # Worker
    thumbnail_widths: str = "500,250,100"
    worker_queues: str = "fileQueue,userQueue"

    @field_validator("session_ttl_seconds")
    @classmethod
    def session_ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("session_ttl_seconds must be greater than 0")
        return v

    @field_validator("queue_retry_max_attempts", "queue_result_ttl_seconds")
    @classmethod
    def must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must be >= 0")
        return v

    @field_validator("queue_job_timeout_seconds")
    @classmethod
    def job_timeout_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("queue_job_timeout_seconds must be greater than 0")
        return v

    @field_validator("thumbnail_widths")
    @classmethod
    def thumbnail_widths_valid(cls, v: str) -> str:
        widths = _split_csv(v)
        if not widths:
            raise ValueError("thumbnail_widths must contain at least one width")
        for raw in widths:
            if not raw.isdigit() or int(raw) <= 0:
                raise ValueError(f"invalid thumbnail width: {raw!r}")
        return v

    @property
    def mongo_url(self) -> str:
        return f"mongodb://{self.db_host}:{self.db_port}"

    def get_thumbnail_widths(self) -> list[int]:
        """Parse widths preserving the configured order."""
        return [int(raw) for raw in _split_csv(self.thumbnail_widths)]

    def get_worker_queues(self) -> list[str]:
        return _split_csv(self.worker_queues)

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
