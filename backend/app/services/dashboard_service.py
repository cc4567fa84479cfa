"""Aggregation helpers for dashboard endpoint."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict

from app.services.metrics_aggregator import compute_daily_metric, round_one_decimal
from app.services.source_normalizer import NormalizedSources
from app.services.week_boundary import week_start


@dataclass(frozen=True)
class TodaySnapshot:
    total_thoughts_logged: int
    total_occurrences: int
    completed_todos: int
    total_todos: int
    last_7_day_average_rating: float
    current_week_plan_published: bool
    today_performance_score: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_thoughts_logged": self.total_thoughts_logged,
            "total_occurrences": self.total_occurrences,
            "completed_todos": self.completed_todos,
            "total_todos": self.total_todos,
            "last_7_day_average_rating": self.last_7_day_average_rating,
            "current_week_plan_published": self.current_week_plan_published,
            "today_performance_score": self.today_performance_score,
        }


def build_today_snapshot(sources: NormalizedSources, today: date) -> TodaySnapshot:
    metric = compute_daily_metric(today, sources)

    total = len(sources.tasks)
    completed = sum(1 for task in sources.tasks if task.completed)
    occurrences = sum((thought.count or 1) for thought in sources.thoughts)

    plan = sources.plan_for_week(week_start(today).isoformat())

    return TodaySnapshot(
        total_thoughts_logged=len(sources.thoughts),
        total_occurrences=occurrences,
        completed_todos=completed,
        total_todos=total,
        last_7_day_average_rating=_recent_average_rating(sources, today),
        current_week_plan_published=bool(plan.published) if plan else False,
        today_performance_score=metric.score,
    )


def _recent_average_rating(sources: NormalizedSources, today: date, days: int = 7) -> float:
    ratings = []
    for offset in range(days):
        rating = sources.rating_on((today - timedelta(days=offset)).isoformat())
        if rating:
            ratings.append(rating.rating)
    if not ratings:
        return 0.0
    return round_one_decimal(sum(ratings) / len(ratings))
