"""Pydantic schemas for derived metrics, trends and the dashboard snapshot."""
from __future__ import annotations

from datetime import date
from typing import List, Literal

from pydantic import Field

from app.api.schemas.records import RecordModel, SourceSnapshot


class DailyMetricPayload(RecordModel):
    date: date
    score: float = Field(ge=0, le=10)
    todo_completion_rate: float = Field(ge=0, le=1)
    planned_next_day: bool
    weekly_plan_published: bool
    manual_rating: int = Field(ge=0, le=10)


class TrendSummaryPayload(RecordModel):
    average_score: float
    direction: Literal["up", "down", "stable"]


class WindowBreakdownPayload(RecordModel):
    average_completion_rate: float
    planning_rate: float


class WindowPayload(RecordModel):
    start: date
    end: date


class PerformanceRequest(RecordModel):
    range: Literal["week", "month", "year"] = "week"
    as_of: date
    snapshot: SourceSnapshot = Field(default_factory=SourceSnapshot)


class PerformanceResponse(RecordModel):
    range: str
    window: WindowPayload
    metrics: List[DailyMetricPayload]
    summary: TrendSummaryPayload
    breakdown: WindowBreakdownPayload
    request_id: str


class DailyMetricRequest(RecordModel):
    date: date
    snapshot: SourceSnapshot = Field(default_factory=SourceSnapshot)


class DailyMetricResponse(RecordModel):
    metric: DailyMetricPayload
    request_id: str


class DashboardRequest(RecordModel):
    today: date
    snapshot: SourceSnapshot = Field(default_factory=SourceSnapshot)


class DashboardResponse(RecordModel):
    today: date
    total_thoughts_logged: int
    total_occurrences: int
    completed_todos: int
    total_todos: int
    last_7_day_average_rating: float
    current_week_plan_published: bool
    today_performance_score: float
    request_id: str
