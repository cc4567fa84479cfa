"""Pydantic schemas for the raw source records consumed by the metrics engine."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DateLike = Union[str, datetime, date]


class RecordModel(BaseModel):
    """Read-only record; accepts camelCase (storage format) or snake_case field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Task(RecordModel):
    id: str
    text: str = ""
    completed: bool = False
    priority: Literal["low", "medium", "high"] = "medium"
    date: DateLike


class DailyRating(RecordModel):
    id: str
    date: DateLike
    rating: int = Field(ge=1, le=10)
    went_well: str = ""
    went_wrong: str = ""
    improvements: str = ""
    journal: str = ""


class WeeklyGoal(RecordModel):
    id: str
    text: str = ""
    completed: bool = False
    category: str = "personal"


class WeeklyPlan(RecordModel):
    id: str
    week_start_date: DateLike
    goals: List[WeeklyGoal] = Field(default_factory=list)
    notes: str = ""
    published: bool = False


class Thought(RecordModel):
    id: str
    text: str = ""
    positive_reframe: str = ""
    date: DateLike
    count: Optional[int] = 1


class SourceSnapshot(RecordModel):
    """One consistent snapshot of every source collection."""

    tasks: List[Task] = Field(default_factory=list)
    ratings: List[DailyRating] = Field(default_factory=list)
    plans: List[WeeklyPlan] = Field(default_factory=list)
    thoughts: List[Thought] = Field(default_factory=list)
