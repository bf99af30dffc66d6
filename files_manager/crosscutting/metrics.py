"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) - Observabilidad de bajo acoplamiento

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO tokens, NO ObjectIds en labels).
    - Exponer helper para generar la respuesta /metrics.

Colaboradores:
    - crosscutting.middleware: registra latencia y conteo HTTP.
    - identity.auth_users: sesiones emitidas/revocadas, logins fallidos.
    - infrastructure.queue: jobs encolados.
    - worker/jobs + usecases de consumo: procesamiento asíncrono y thumbnails.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "files_manager_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "files_manager_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

# ------------------------
# Sesiones
# ------------------------
_sessions_issued_total = Counter(
    "files_manager_sessions_issued_total",
    "Tokens de sesión emitidos",
    registry=_registry,
)

_sessions_revoked_total = Counter(
    "files_manager_sessions_revoked_total",
    "Tokens de sesión revocados",
    registry=_registry,
)

_sign_in_failures_total = Counter(
    "files_manager_sign_in_failures_total",
    "Intentos de sign-in rechazados",
    registry=_registry,
)

# ------------------------
# Colas / Worker
# ------------------------
_jobs_enqueued_total = Counter(
    "files_manager_jobs_enqueued_total",
    "Jobs encolados por cola",
    ["queue"],
    registry=_registry,
)

_worker_processed_total = Counter(
    "files_manager_worker_processed_total",
    "Jobs procesados por el worker",
    ["queue", "status"],
    registry=_registry,
)

_worker_failed_total = Counter(
    "files_manager_worker_failed_total",
    "Jobs fallidos en el worker",
    ["queue"],
    registry=_registry,
)

_worker_duration = Histogram(
    "files_manager_worker_duration_seconds",
    "Duración del procesamiento del worker (segundos)",
    ["queue"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
    registry=_registry,
)

_thumbnails_generated_total = Counter(
    "files_manager_thumbnails_generated_total",
    "Thumbnails generados por ancho",
    ["width"],
    registry=_registry,
)

_thumbnails_failed_total = Counter(
    "files_manager_thumbnails_failed_total",
    "Thumbnails fallidos por ancho",
    ["width"],
    registry=_registry,
)


# -----------------------------------------------------------------------------
# API de registro
# -----------------------------------------------------------------------------


def record_request_metrics(
    endpoint: str, method: str, status_code: int, latency_seconds: float
) -> None:
    """Registra conteo y latencia de un request HTTP."""
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized, method=method, status=_status_bucket(status_code)
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_session_issued() -> None:
    _sessions_issued_total.inc()


def record_session_revoked() -> None:
    _sessions_revoked_total.inc()


def record_sign_in_failure() -> None:
    _sign_in_failures_total.inc()


def record_job_enqueued(queue: str) -> None:
    _jobs_enqueued_total.labels(queue=queue).inc()


def record_worker_processed(queue: str, status: str) -> None:
    _worker_processed_total.labels(queue=queue, status=status).inc()


def record_worker_failed(queue: str) -> None:
    _worker_failed_total.labels(queue=queue).inc()


def observe_worker_duration(queue: str, duration_seconds: float) -> None:
    _worker_duration.labels(queue=queue).observe(duration_seconds)


def record_thumbnail_generated(width: int) -> None:
    _thumbnails_generated_total.labels(width=str(width)).inc()


def record_thumbnail_failed(width: int) -> None:
    _thumbnails_failed_total.labels(width=str(width)).inc()


# -----------------------------------------------------------------------------
# Helpers internos
# -----------------------------------------------------------------------------


def _normalize_endpoint(path: str) -> str:
    """Reemplaza ObjectIds de Mongo por `{id}` para evitar cardinalidad alta."""
    return re.sub(r"/[0-9a-fA-F]{24}(?=/|$)", "/{id}", path)


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
