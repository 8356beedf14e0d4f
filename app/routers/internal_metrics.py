from __future__ import annotations

from fastapi import APIRouter

from app.core.metrics import request_metrics

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


@router.get("")
def endpoint_metrics():
    return {"endpoints": request_metrics.snapshot()}
