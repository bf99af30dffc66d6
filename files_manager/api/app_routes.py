"""
Endpoints operativos: /status, /stats y /metrics.

/status nunca falla por un store caído (reporta false); /stats sí (503).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from ..application.usecases import stats_payload, status_payload
from ..container import get_session_store, get_store_connector
from ..crosscutting.metrics import get_metrics_response
from ..domain.services import SessionStore
from ..infrastructure.db.mongo import MongoStoreConnector

router = APIRouter(tags=["app"])


@router.get("/status")
def get_status(
    sessions: SessionStore = Depends(get_session_store),
    store: MongoStoreConnector = Depends(get_store_connector),
) -> dict[str, bool]:
    return status_payload(sessions=sessions, store=store)


@router.get("/stats")
def get_stats(
    store: MongoStoreConnector = Depends(get_store_connector),
) -> dict[str, int]:
    return stats_payload(store=store)


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
