from datetime import date, timedelta

import pytest

from app.api.schemas.records import DailyRating, Task, WeeklyPlan
from app.services.metrics_aggregator import DailyMetric
from app.services.source_normalizer import normalize_sources
from app.services.trend_analyzer import breakdown, build_performance_report, summarize


def _metrics(scores, planned=False, rate=0.0, start=date(2024, 1, 1)):
    return [
        DailyMetric(
            date=start + timedelta(days=index),
            score=score,
            todo_completion_rate=rate,
            planned_next_day=planned,
            weekly_plan_published=False,
            manual_rating=0,
        )
        for index, score in enumerate(scores)
    ]


def test_summarize_empty_sequence_is_stable_zero():
    summary = summarize([])
    assert summary.average_score == 0
    assert summary.direction == "stable"


def test_single_point_is_stable():
    summary = summarize(_metrics([9.0]))
    assert summary.average_score == 9.0
    assert summary.direction == "stable"


def test_rising_halves_trend_up():
    summary = summarize(_metrics([5.0] * 5 + [7.0] * 5))
    assert summary.direction == "up"
    assert summary.average_score == pytest.approx(6.0)


def test_flat_scores_are_stable():
    assert summarize(_metrics([5.0] * 10)).direction == "stable"


def test_falling_halves_trend_down():
    assert summarize(_metrics([8.0] * 4 + [6.0] * 4)).direction == "down"


def test_deadband_absorbs_half_point_changes():
    assert summarize(_metrics([5.0, 5.5])).direction == "stable"
    assert summarize(_metrics([5.5, 5.0])).direction == "stable"
    assert summarize(_metrics([5.0, 5.6])).direction == "up"
    assert summarize(_metrics([5.6, 5.0])).direction == "down"


def test_odd_length_puts_extra_point_in_second_half():
    # first half [2.0], second half [2.0, 5.0] -> mean 3.5
    assert summarize(_metrics([2.0, 2.0, 5.0])).direction == "up"


def test_breakdown_averages_completion_and_planning():
    metrics = _metrics([1.0, 1.0], rate=0.5) + _metrics([1.0, 1.0], planned=True, rate=1.0, start=date(2024, 1, 3))
    result = breakdown(metrics)
    assert result.average_completion_rate == pytest.approx(0.75)
    assert result.planning_rate == pytest.approx(0.5)
    empty = breakdown([])
    assert empty.average_completion_rate == 0
    assert empty.planning_rate == 0


def test_performance_report_covers_inclusive_window():
    sources = normalize_sources(
        tasks=[Task(id="1", date="2024-01-10", completed=True)],
        ratings=[DailyRating(id="r", date="2024-01-10", rating=10)],
        plans=[WeeklyPlan(id="p", week_start_date="2024-01-08", published=True)],
    )
    report = build_performance_report(sources, "week", date(2024, 1, 10))
    assert report.start == date(2024, 1, 3)
    assert report.end == date(2024, 1, 10)
    assert len(report.metrics) == 8
    assert report.metrics[-1].score == 8.0
    assert report.summary.direction == "up"
    assert report.breakdown.planning_rate == pytest.approx(1 / 8)


def test_performance_report_rejects_unknown_range():
    with pytest.raises(ValueError):
        build_performance_report(normalize_sources(), "decade", date(2024, 1, 10))
