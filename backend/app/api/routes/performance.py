"""Performance trend and daily metric endpoints."""
from __future__ import annotations

from datetime import date, tzinfo
from time import perf_counter

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from app.api.deps import get_local_timezone, get_snapshot
from app.api.schemas.metrics import (
    DailyMetricPayload,
    DailyMetricRequest,
    DailyMetricResponse,
    PerformanceRequest,
    PerformanceResponse,
    TrendSummaryPayload,
    WindowBreakdownPayload,
    WindowPayload,
)
from app.api.schemas.records import SourceSnapshot
from app.core.config import settings
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.metrics_aggregator import compute_daily_metric
from app.services.source_normalizer import normalize_snapshot
from app.services.trend_analyzer import PerformanceReport, build_performance_report

router = APIRouter()


@router.post("/performance", response_model=PerformanceResponse, tags=["performance"])
def post_performance(
    payload: PerformanceRequest,
    request: Request,
    tz: tzinfo = Depends(get_local_timezone),
) -> PerformanceResponse:
    return _performance(request, payload.snapshot, payload.range, payload.as_of, tz)


@router.get("/performance", response_model=PerformanceResponse, tags=["performance"])
def get_performance(
    request: Request,
    as_of: date = Query(..., description="Reference date the window ends on"),
    range_name: str = Query(settings.default_range, alias="range", pattern="^(week|month|year)$"),
    snapshot: SourceSnapshot = Depends(get_snapshot),
    tz: tzinfo = Depends(get_local_timezone),
) -> PerformanceResponse:
    return _performance(request, snapshot, range_name, as_of, tz)


@router.post("/metrics/daily", response_model=DailyMetricResponse, tags=["performance"])
def post_daily_metric(
    payload: DailyMetricRequest,
    request: Request,
    tz: tzinfo = Depends(get_local_timezone),
) -> DailyMetricResponse:
    request_id = getattr(request.state, "request_id", None)
    with trace("metrics.daily", metadata={"date": payload.date.isoformat()}, request_id=request_id):
        try:
            sources = normalize_snapshot(payload.snapshot, tz=tz)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
        metric = compute_daily_metric(payload.date, sources)

    log_metric("metrics.daily.success", 1, metadata={"date": payload.date.isoformat()})
    return DailyMetricResponse(metric=DailyMetricPayload(**metric.to_dict()), request_id=request_id or "")


def _performance(
    request: Request,
    snapshot: SourceSnapshot,
    range_name: str,
    as_of: date,
    tz: tzinfo,
) -> PerformanceResponse:
    request_id = getattr(request.state, "request_id", None)
    start = perf_counter()
    metadata = {"range": range_name, "as_of": as_of.isoformat()}
    with trace("performance.report", metadata=metadata, request_id=request_id):
        try:
            sources = normalize_snapshot(snapshot, tz=tz)
            report = build_performance_report(sources, range_name, as_of)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    latency_ms = (perf_counter() - start) * 1000
    log_metric("performance.report.success", 1, metadata={"range": range_name})
    log_metric("performance.report.count", len(report.metrics), metadata={"range": range_name})
    log_metric("performance.report.latency_ms", latency_ms, metadata={"range": range_name})
    return _serialize_report(report, request_id)


def _serialize_report(report: PerformanceReport, request_id: str | None) -> PerformanceResponse:
    return PerformanceResponse(
        range=report.range_name,
        window=WindowPayload(start=report.start, end=report.end),
        metrics=[DailyMetricPayload(**metric.to_dict()) for metric in report.metrics],
        summary=TrendSummaryPayload(**report.summary.to_dict()),
        breakdown=WindowBreakdownPayload(**report.breakdown.to_dict()),
        request_id=request_id or "",
    )
