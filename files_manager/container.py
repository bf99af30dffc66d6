"""
===============================================================================
TARJETA CRC - files_manager/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, sesiones, colas, adapters).
  - Exponer factories para FastAPI (Depends) y para el worker.
  - Mantener singletons con caching (lru_cache) para recursos pesados.
  - Elegir adapters in-memory cuando APP_ENV es de test.

Colaboradores:
  - crosscutting.config.get_settings
  - domain.services.* (puertos)
  - infrastructure.* (implementaciones)
  - application.usecases.* (casos de uso)
  - identity.auth_users.AuthService

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from redis import Redis

from .application.usecases import (
    CreateUserUseCase,
    GetCurrentUserUseCase,
    ProcessFileJobUseCase,
    ProcessUserJobUseCase,
)
from .crosscutting.config import get_settings
from .domain.services import (
    FileRepository,
    JobQueue,
    SessionStore,
    ThumbnailGenerator,
    UserRepository,
    WelcomeNotifier,
)
from .identity.auth_users import AuthService
from .infrastructure.db.mongo import MongoStoreConnector, get_store
from .infrastructure.notifications import LoggingWelcomeNotifier
from .infrastructure.queue import InMemoryJobQueue, RQJobQueue, RQQueueConfig
from .infrastructure.repositories import MongoFileRepository, MongoUserRepository
from .infrastructure.sessions import (
    InMemorySessionBackend,
    RedisSessionBackend,
    TokenSessionStore,
)
from .infrastructure.thumbnails import PillowThumbnailGenerator

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => adapters in-memory."""
    return get_settings().is_test()


# =============================================================================
# Recursos compartidos (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_redis_client() -> Redis:
    """Cliente Redis compartido por sesiones y colas (pool interno)."""
    settings = get_settings()
    return Redis.from_url(
        settings.redis_url,
        socket_connect_timeout=2,
        socket_timeout=5,
        health_check_interval=30,
    )


def get_store_connector() -> MongoStoreConnector:
    """Connector Mongo del proceso (inicializado en lifespan / worker.main)."""
    return get_store()


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    settings = get_settings()
    if _is_test_env():
        backend = InMemorySessionBackend()
    else:
        backend = RedisSessionBackend(get_redis_client())
    return TokenSessionStore(backend, key_prefix=settings.session_key_prefix)


@lru_cache(maxsize=1)
def get_job_queue() -> JobQueue:
    settings = get_settings()
    if _is_test_env():
        return InMemoryJobQueue(
            file_queue_name=settings.file_queue_name,
            user_queue_name=settings.user_queue_name,
        )

    config = RQQueueConfig(
        file_queue_name=settings.file_queue_name,
        user_queue_name=settings.user_queue_name,
        retry_max_attempts=settings.queue_retry_max_attempts,
        job_timeout_seconds=settings.queue_job_timeout_seconds,
        result_ttl_seconds=settings.queue_result_ttl_seconds,
    )
    return RQJobQueue(redis=get_redis_client(), config=config)


@lru_cache(maxsize=1)
def get_thumbnail_generator() -> ThumbnailGenerator:
    return PillowThumbnailGenerator()


@lru_cache(maxsize=1)
def get_welcome_notifier() -> WelcomeNotifier:
    return LoggingWelcomeNotifier()


# =============================================================================
# Repositorios
# =============================================================================


def get_user_repository() -> UserRepository:
    return MongoUserRepository(get_store_connector())


def get_file_repository() -> FileRepository:
    return MongoFileRepository(get_store_connector())


# =============================================================================
# Auth + casos de uso (factory por request / por job)
# =============================================================================


def get_auth_service() -> AuthService:
    return AuthService(
        users=get_user_repository(),
        sessions=get_session_store(),
        ttl_seconds=get_settings().session_ttl_seconds,
    )


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(users=get_user_repository(), queue=get_job_queue())


def get_current_user_use_case() -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(users=get_user_repository())


def get_process_file_job_use_case() -> ProcessFileJobUseCase:
    return ProcessFileJobUseCase(
        files=get_file_repository(),
        generator=get_thumbnail_generator(),
        widths=get_settings().get_thumbnail_widths(),
    )


def get_process_user_job_use_case() -> ProcessUserJobUseCase:
    return ProcessUserJobUseCase(
        users=get_user_repository(), notifier=get_welcome_notifier()
    )


def reset_container() -> None:
    """Limpia singletons cacheados (tests)."""
    for factory in (
        get_redis_client,
        get_session_store,
        get_job_queue,
        get_thumbnail_generator,
        get_welcome_notifier,
    ):
        factory.cache_clear()
