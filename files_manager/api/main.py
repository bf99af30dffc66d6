"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Open/close the Mongo store connector in the lifespan
  - Configure request context middleware
  - Mount auth, users and operational routers
  - Register RFC7807 exception handlers

Collaborators:
  - infrastructure.db.mongo: init_store / close_store
  - RequestContextMiddleware: Request ID and logging context
  - auth_routes, user_routes, app_routes

Notes:
  - A store that fails to connect does not abort startup: /status reports
    it and dependent endpoints answer 503.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.mongo import close_store, init_store
from .app_routes import router as app_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers
from .user_routes import router as user_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Connects the document store once."""
    settings = get_settings()

    store = init_store(
        settings.mongo_url,
        settings.db_database,
        server_selection_timeout_ms=settings.db_server_selection_timeout_ms,
    )
    logger.info(
        "Files Manager API starting up",
        extra={
            "app_env": settings.app_env,
            "store_alive": store.is_alive(),
            "session_ttl_seconds": settings.session_ttl_seconds,
        },
    )

    try:
        yield
    finally:
        close_store()
        logger.info("Files Manager API shutting down")


def create_app() -> FastAPI:
    fastapi_app = FastAPI(title="Files Manager API", version="0.1.0", lifespan=lifespan)

    fastapi_app.add_middleware(RequestContextMiddleware)

    fastapi_app.include_router(app_router)
    fastapi_app.include_router(auth_router)
    fastapi_app.include_router(user_router)

    register_exception_handlers(fastapi_app)
    return fastapi_app


app = create_app()


def run() -> None:
    """Console entrypoint: uvicorn on the configured port."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
