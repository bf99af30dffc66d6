"""
===============================================================================
TARJETA CRC - worker/worker_health.py (Readiness del Worker)
===============================================================================

Responsabilidades:
  - Verificar conectividad de Redis y MongoDB para readiness del worker.
  - Exponer CLI de healthcheck para contenedores (exit code 0/1).

Patrones aplicados:
  - Fail-safe diagnostics: nunca lanzar excepciones al caller; devolver estado.
  - Timeouts agresivos: healthchecks deben responder rápido.

Colaboradores:
  - crosscutting.config.get_settings
  - redis.Redis
  - infrastructure.db.mongo.MongoStoreConnector (ping de corta vida)
===============================================================================
"""

from __future__ import annotations

import json
from typing import Any

from redis import Redis
from redis.exceptions import RedisError

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..infrastructure.db.mongo import MongoStoreConnector


def _check_store(url: str, database: str) -> bool:
    store = MongoStoreConnector(url, database, server_selection_timeout_ms=2000)
    try:
        return store.connect()
    finally:
        store.close()


def _check_redis(redis_url: str) -> bool:
    if not redis_url:
        return False
    try:
        redis = Redis.from_url(redis_url, socket_connect_timeout=2, socket_timeout=2)
        return bool(redis.ping())
    except RedisError as exc:
        logger.warning(
            "Readiness worker: Redis no disponible", extra={"error": str(exc)}
        )
        return False


def readiness_payload() -> dict[str, Any]:
    """ok si Redis y MongoDB responden."""
    settings = get_settings()
    store_ok = _check_store(settings.mongo_url, settings.db_database)
    redis_ok = _check_redis(settings.redis_url or "")

    return {
        "ok": bool(store_ok and redis_ok),
        "store": "connected" if store_ok else "disconnected",
        "redis": "connected" if redis_ok else "disconnected",
    }


def main() -> None:
    payload = readiness_payload()
    print(json.dumps(payload))
    raise SystemExit(0 if payload.get("ok") else 1)


if __name__ == "__main__":
    main()
