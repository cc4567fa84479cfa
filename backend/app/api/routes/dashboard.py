"""Dashboard snapshot endpoints."""
from __future__ import annotations

from datetime import date, tzinfo

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from app.api.deps import get_local_timezone, get_snapshot
from app.api.schemas.metrics import DashboardRequest, DashboardResponse
from app.api.schemas.records import SourceSnapshot
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.dashboard_service import build_today_snapshot
from app.services.source_normalizer import normalize_snapshot

router = APIRouter()


@router.post("/dashboard/today", response_model=DashboardResponse, tags=["dashboard"])
def post_dashboard_today(
    payload: DashboardRequest,
    request: Request,
    tz: tzinfo = Depends(get_local_timezone),
) -> DashboardResponse:
    return _dashboard(request, payload.snapshot, payload.today, tz)


@router.get("/dashboard/today", response_model=DashboardResponse, tags=["dashboard"])
def get_dashboard_today(
    request: Request,
    today: date = Query(..., description="Calendar day the snapshot is taken for"),
    snapshot: SourceSnapshot = Depends(get_snapshot),
    tz: tzinfo = Depends(get_local_timezone),
) -> DashboardResponse:
    return _dashboard(request, snapshot, today, tz)


def _dashboard(request: Request, snapshot: SourceSnapshot, today: date, tz: tzinfo) -> DashboardResponse:
    request_id = getattr(request.state, "request_id", None)
    with trace("dashboard.today", metadata={"today": today.isoformat()}, request_id=request_id):
        try:
            sources = normalize_snapshot(snapshot, tz=tz)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
        summary = build_today_snapshot(sources, today)

    log_metric("dashboard.today.score", summary.today_performance_score, metadata={"today": today.isoformat()})
    return DashboardResponse(today=today, request_id=request_id or "", **summary.to_dict())
