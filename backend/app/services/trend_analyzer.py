"""Windowed trend statistics over ordered daily metrics."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Literal, Sequence

from app.services.metrics_aggregator import DailyMetric, compute_metrics_for_range
from app.services.source_normalizer import NormalizedSources
from app.services.window_selector import resolve_window

logger = logging.getLogger(__name__)

TREND_DEADBAND = 0.5

Direction = Literal["up", "down", "stable"]


@dataclass(frozen=True)
class TrendSummary:
    average_score: float
    direction: Direction

    def to_dict(self) -> Dict[str, object]:
        return {"average_score": self.average_score, "direction": self.direction}


@dataclass(frozen=True)
class WindowBreakdown:
    average_completion_rate: float
    planning_rate: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "average_completion_rate": self.average_completion_rate,
            "planning_rate": self.planning_rate,
        }


@dataclass(frozen=True)
class PerformanceReport:
    range_name: str
    start: date
    end: date
    metrics: List[DailyMetric]
    summary: TrendSummary
    breakdown: WindowBreakdown


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def summarize(metrics: Sequence[DailyMetric]) -> TrendSummary:
    """Average score plus up/down/stable direction comparing the two halves of the window."""
    scores = [metric.score for metric in metrics]
    average = _mean(scores)
    if len(scores) < 2:
        return TrendSummary(average_score=average, direction="stable")

    midpoint = len(scores) // 2
    first_mean = _mean(scores[:midpoint])
    second_mean = _mean(scores[midpoint:])

    direction: Direction = "stable"
    if second_mean > first_mean + TREND_DEADBAND:
        direction = "up"
    elif second_mean < first_mean - TREND_DEADBAND:
        direction = "down"
    return TrendSummary(average_score=average, direction=direction)


def breakdown(metrics: Sequence[DailyMetric]) -> WindowBreakdown:
    """Average completion rate and share of days planned in advance."""
    if not metrics:
        return WindowBreakdown(average_completion_rate=0.0, planning_rate=0.0)
    planned = sum(1 for metric in metrics if metric.planned_next_day)
    return WindowBreakdown(
        average_completion_rate=_mean([metric.todo_completion_rate for metric in metrics]),
        planning_rate=planned / len(metrics),
    )


def build_performance_report(sources: NormalizedSources, range_name: str, as_of: date) -> PerformanceReport:
    """Resolve the window, aggregate every day in it and summarize the result."""
    start, end = resolve_window(range_name, as_of)
    metrics = compute_metrics_for_range(start, end, sources)
    summary = summarize(metrics)
    logger.info(
        "Performance report range=%s window=%s..%s days=%s average=%.2f direction=%s",
        range_name,
        start.isoformat(),
        end.isoformat(),
        len(metrics),
        summary.average_score,
        summary.direction,
    )
    return PerformanceReport(
        range_name=range_name,
        start=start,
        end=end,
        metrics=metrics,
        summary=summary,
        breakdown=breakdown(metrics),
    )
