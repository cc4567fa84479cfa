"""Per-day composite performance metrics."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from app.services.source_normalizer import NormalizedSources
from app.services.week_boundary import week_start

logger = logging.getLogger(__name__)

PLANNED_NEXT_DAY_POINTS = 2.0
COMPLETION_POINTS = 3.0
WEEKLY_PLAN_POINTS = 2.0
RATING_POINTS = 3.0
MAX_SCORE = 10.0


@dataclass(frozen=True)
class DailyMetric:
    date: date
    score: float
    todo_completion_rate: float
    planned_next_day: bool
    weekly_plan_published: bool
    manual_rating: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "date": self.date.isoformat(),
            "score": self.score,
            "todo_completion_rate": self.todo_completion_rate,
            "planned_next_day": self.planned_next_day,
            "weekly_plan_published": self.weekly_plan_published,
            "manual_rating": self.manual_rating,
        }


def compute_daily_metric(day: date, sources: NormalizedSources) -> DailyMetric:
    """Join the day's tasks, rating and weekly plan into one DailyMetric."""
    key = day.isoformat()

    day_tasks = sources.tasks_on(key)
    total = len(day_tasks)
    completed = sum(1 for task in day_tasks if task.completed)
    completion_rate = (completed / total) if total else 0.0

    next_key = (day + timedelta(days=1)).isoformat()
    planned_next_day = bool(sources.tasks_on(next_key))

    plan = sources.plan_for_week(week_start(day).isoformat())
    weekly_plan_published = bool(plan.published) if plan else False

    rating = sources.rating_on(key)
    manual_rating = max(0, min(10, rating.rating)) if rating else 0

    score = composite_score(
        planned_next_day=planned_next_day,
        completion_rate=completion_rate,
        weekly_plan_published=weekly_plan_published,
        manual_rating=manual_rating,
    )
    return DailyMetric(
        date=day,
        score=score,
        todo_completion_rate=completion_rate,
        planned_next_day=planned_next_day,
        weekly_plan_published=weekly_plan_published,
        manual_rating=manual_rating,
    )


def composite_score(
    *,
    planned_next_day: bool,
    completion_rate: float,
    weekly_plan_published: bool,
    manual_rating: int,
) -> float:
    """Weighted 0-10 score, rounded once at the end and clamped."""
    raw = (
        (PLANNED_NEXT_DAY_POINTS if planned_next_day else 0.0)
        + completion_rate * COMPLETION_POINTS
        + (WEEKLY_PLAN_POINTS if weekly_plan_published else 0.0)
        + (manual_rating / 10) * RATING_POINTS
    )
    return max(0.0, min(MAX_SCORE, round_one_decimal(raw)))


def round_one_decimal(value: float) -> float:
    """Round half-up on the exact binary value, matching display formatting of the tracker."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_metrics_for_range(start: date, end: date, sources: NormalizedSources) -> List[DailyMetric]:
    """One DailyMetric per day from ``start`` to ``end`` inclusive, in date order."""
    if end < start:
        raise ValueError(f"Range end {end.isoformat()} is before start {start.isoformat()}")
    days = (end - start).days + 1
    metrics = [compute_daily_metric(start + timedelta(days=offset), sources) for offset in range(days)]
    logger.debug("Computed %s daily metrics for %s..%s", len(metrics), start.isoformat(), end.isoformat())
    return metrics
