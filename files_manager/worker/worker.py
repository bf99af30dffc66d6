"""
===============================================================================
TARJETA CRC - worker/worker.py (Entrypoint del proceso Worker)
===============================================================================

Responsabilidades:
  - Levantar un RQ Worker que drena fileQueue y userQueue.
  - Inicializar dependencias del proceso: Redis + store Mongo.
  - Apagar recursos de forma ordenada.

Patrones aplicados:
  - Process Bootstrap: inicializa recursos antes de trabajar.
  - Fail-fast: si Redis no responde al inicio, no arrancar.

Colaboradores:
  - crosscutting.config.get_settings
  - infrastructure.db.mongo.init_store / close_store
  - redis.Redis + rq.Worker
===============================================================================
"""

from __future__ import annotations

from redis import Redis
from redis.exceptions import RedisError
from rq import Queue, Worker

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..infrastructure.db.mongo import close_store, init_store


def _build_redis_connection(redis_url: str) -> Redis:
    # El worker bloquea en BLPOP: sin socket_timeout corto.
    return Redis.from_url(redis_url, socket_connect_timeout=2, health_check_interval=30)


def main() -> None:
    settings = get_settings()

    redis_url = (settings.redis_url or "").strip()
    if not redis_url:
        raise SystemExit("REDIS_URL es requerido para ejecutar el worker.")

    redis_conn = _build_redis_connection(redis_url)
    try:
        redis_conn.ping()
    except RedisError as exc:
        logger.error("Redis no disponible para worker", extra={"error": str(exc)})
        raise SystemExit("Redis no disponible.") from exc

    store = init_store(
        settings.mongo_url,
        settings.db_database,
        server_selection_timeout_ms=settings.db_server_selection_timeout_ms,
    )

    queue_names = settings.get_worker_queues()
    try:
        logger.info(
            "Worker arrancando",
            extra={"queues": queue_names, "store_alive": store.is_alive()},
        )

        queues = [Queue(name=name, connection=redis_conn) for name in queue_names]
        worker = Worker(queues, connection=redis_conn)
        worker.work(with_scheduler=False)

    except KeyboardInterrupt:
        logger.info("Worker detenido por señal (KeyboardInterrupt)")
    finally:
        close_store()
        logger.info("Worker apagado")


if __name__ == "__main__":
    main()
