from datetime import date

from app.api.schemas.records import DailyRating, Task, Thought, WeeklyPlan
from app.services.dashboard_service import build_today_snapshot
from app.services.source_normalizer import normalize_sources


def test_today_snapshot_combines_counts_and_score():
    sources = normalize_sources(
        tasks=[
            Task(id="1", date="2024-01-03", completed=True),
            Task(id="2", date="2024-01-03T19:00:00", completed=False),
            Task(id="3", date="2024-01-04"),
            Task(id="4", date="2023-12-20", completed=True),
        ],
        ratings=[
            DailyRating(id="a", date="2024-01-03", rating=6),
            DailyRating(id="b", date="2023-12-28", rating=9),
            DailyRating(id="c", date="2023-12-27", rating=1),
        ],
        plans=[WeeklyPlan(id="p", week_start_date="2024-01-01", published=True)],
        thoughts=[
            Thought(id="t1", text="I always fall behind", date="2024-01-02", count=3),
            Thought(id="t2", text="Nobody noticed", date="2024-01-03", count=0),
        ],
    )
    snapshot = build_today_snapshot(sources, date(2024, 1, 3))

    assert snapshot.total_thoughts_logged == 2
    assert snapshot.total_occurrences == 4
    assert snapshot.completed_todos == 2
    assert snapshot.total_todos == 4
    # 2023-12-27 falls outside the trailing seven days
    assert snapshot.last_7_day_average_rating == 7.5
    assert snapshot.current_week_plan_published is True
    # 2 (planned) + 1.5 (half done) + 2 (plan) + 1.8 (rating 6)
    assert snapshot.today_performance_score == 7.3


def test_today_snapshot_with_no_records():
    snapshot = build_today_snapshot(normalize_sources(), date(2024, 1, 7))
    assert snapshot.to_dict() == {
        "total_thoughts_logged": 0,
        "total_occurrences": 0,
        "completed_todos": 0,
        "total_todos": 0,
        "last_7_day_average_rating": 0.0,
        "current_week_plan_published": False,
        "today_performance_score": 0.0,
    }


def test_recent_average_rating_rounds_ties_up():
    sources = normalize_sources(
        ratings=[
            DailyRating(id="1", date="2024-01-01", rating=6),
            DailyRating(id="2", date="2024-01-02", rating=6),
            DailyRating(id="3", date="2024-01-03", rating=6),
            DailyRating(id="4", date="2024-01-04", rating=7),
        ]
    )
    snapshot = build_today_snapshot(sources, date(2024, 1, 4))
    assert snapshot.last_7_day_average_rating == 6.3


def test_null_thought_count_counts_as_one_occurrence():
    thought = Thought.model_validate({"id": "t", "text": "late again", "date": "2024-01-01", "count": None})
    snapshot = build_today_snapshot(normalize_sources(thoughts=[thought]), date(2024, 1, 1))
    assert snapshot.total_thoughts_logged == 1
    assert snapshot.total_occurrences == 1
