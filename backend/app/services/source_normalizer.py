"""Index raw source collections by canonical calendar-day keys."""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import DefaultDict, Dict, Iterable, List, Optional

from app.api.schemas.records import DailyRating, DateLike, SourceSnapshot, Task, Thought, WeeklyPlan

logger = logging.getLogger(__name__)


@dataclass
class NormalizedSources:
    """Lookup tables built once per query; treat as read-only."""

    tasks_by_date: Dict[str, List[Task]] = field(default_factory=dict)
    ratings_by_date: Dict[str, DailyRating] = field(default_factory=dict)
    plans_by_week: Dict[str, WeeklyPlan] = field(default_factory=dict)
    tasks: List[Task] = field(default_factory=list)
    ratings: List[DailyRating] = field(default_factory=list)
    thoughts: List[Thought] = field(default_factory=list)

    def tasks_on(self, key: str) -> List[Task]:
        return self.tasks_by_date.get(key, [])

    def rating_on(self, key: str) -> Optional[DailyRating]:
        return self.ratings_by_date.get(key)

    def plan_for_week(self, key: str) -> Optional[WeeklyPlan]:
        return self.plans_by_week.get(key)


def to_local_date(value: DateLike, tz: tzinfo | None = None) -> date:
    """
    Resolve a date, datetime or ISO string to a local calendar day.

    Timezone-aware timestamps are converted to ``tz`` first when given; naive timestamps are
    taken as already local. Raises ValueError for anything that is not a valid date.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value {value!r}")

    text = value.strip()
    if not text:
        raise ValueError("Empty date value")
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"Invalid date value {value!r}") from exc
    return to_local_date(parsed, tz)


def date_key(value: DateLike, tz: tzinfo | None = None) -> str:
    """Canonical ``YYYY-MM-DD`` key for a date-like value."""
    return to_local_date(value, tz).isoformat()


def normalize_sources(
    tasks: Iterable[Task] = (),
    ratings: Iterable[DailyRating] = (),
    plans: Iterable[WeeklyPlan] = (),
    thoughts: Iterable[Thought] = (),
    *,
    tz: tzinfo | None = None,
) -> NormalizedSources:
    """Build the per-day lookup tables; duplicate ratings and plans resolve last-write-wins."""
    task_list = list(tasks)
    rating_list = list(ratings)

    tasks_by_date: DefaultDict[str, List[Task]] = defaultdict(list)
    for task in task_list:
        tasks_by_date[date_key(task.date, tz)].append(task)

    ratings_by_date: Dict[str, DailyRating] = {}
    for rating in rating_list:
        key = date_key(rating.date, tz)
        if key in ratings_by_date:
            logger.warning("Duplicate rating for %s (ids %s, %s); keeping the later record", key, ratings_by_date[key].id, rating.id)
        ratings_by_date[key] = rating

    plans_by_week: Dict[str, WeeklyPlan] = {}
    for plan in plans:
        start = to_local_date(plan.week_start_date, tz)
        key = start.isoformat()
        if start.isoweekday() != 1:
            logger.warning("Weekly plan %s is keyed on %s, which is not a Monday", plan.id, key)
        if key in plans_by_week:
            logger.warning("Duplicate weekly plan for %s (ids %s, %s); keeping the later record", key, plans_by_week[key].id, plan.id)
        plans_by_week[key] = plan

    logger.debug(
        "Normalized sources tasks=%s days=%s ratings=%s plans=%s",
        len(task_list),
        len(tasks_by_date),
        len(ratings_by_date),
        len(plans_by_week),
    )
    return NormalizedSources(
        tasks_by_date=dict(tasks_by_date),
        ratings_by_date=ratings_by_date,
        plans_by_week=plans_by_week,
        tasks=task_list,
        ratings=rating_list,
        thoughts=list(thoughts),
    )


def normalize_snapshot(snapshot: SourceSnapshot, *, tz: tzinfo | None = None) -> NormalizedSources:
    return normalize_sources(snapshot.tasks, snapshot.ratings, snapshot.plans, snapshot.thoughts, tz=tz)
