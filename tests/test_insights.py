import copy
from datetime import datetime, timezone

import pytest

from moodjournal.insights import (
    DEFAULT_INSIGHTS,
    classify_trend,
    compute_insights,
    filter_entries,
    insight_message,
    most_active_day,
    period_metrics,
    weekly_reflection,
)
from tests.conftest import make_entry


@pytest.fixture
def ten_entries():
    """Most recent first: seven mixed recent entries, three old Tuesday ones."""
    recent = [
        (["work"], 0.3, "2024-01-14T09:00:00+00:00"),            # Sunday
        (["work", "stress"], 0.1, "2024-01-13T09:00:00+00:00"),  # Saturday
        (["work"], 0.2, "2024-01-12T09:00:00+00:00"),            # Friday
        (["family"], 0.4, "2024-01-11T09:00:00+00:00"),          # Thursday
        (["family"], 0.2, "2024-01-10T09:00:00+00:00"),          # Wednesday
        (["stress"], 0.0, "2024-01-09T09:00:00+00:00"),          # Tuesday
        (["goals"], 0.2, "2024-01-08T09:00:00+00:00"),           # Monday
    ]
    old = [
        (["nature", "gratitude"], -1.0, "2024-01-02T09:00:00+00:00"),
        (["nature", "gratitude"], -1.0, "2023-12-26T09:00:00+00:00"),
        (["nature", "gratitude"], -1.0, "2023-12-19T09:00:00+00:00"),
    ]
    return [make_entry(t, s, ts) for t, s, ts in recent + old]


def test_themes_come_from_recent_window_only(ten_entries):
    insights = compute_insights(ten_entries)
    # ties between stress and family go to the first encountered
    assert insights["weeklyThemes"] == ["work", "stress", "family"]
    assert "nature" not in insights["weeklyThemes"]


def test_trend_uses_recent_window_only(ten_entries):
    assert compute_insights(ten_entries)["sentimentTrend"] == "positive"


def test_most_active_day_uses_every_entry(ten_entries):
    assert compute_insights(ten_entries)["mostActiveDay"] == "Tuesday"


def test_total_entries(ten_entries):
    assert compute_insights(ten_entries)["totalEntries"] == 10


def test_recompute_is_idempotent(ten_entries):
    before = copy.deepcopy(ten_entries)
    assert compute_insights(ten_entries) == compute_insights(ten_entries)
    assert ten_entries == before


def test_empty_collection():
    assert compute_insights([]) == DEFAULT_INSIGHTS


def test_fewer_than_three_themes():
    insights = compute_insights([make_entry(["general"], 0.0)])
    assert insights["weeklyThemes"] == ["general"]
    assert insights["sentimentTrend"] == "stable"


@pytest.mark.parametrize("avg,trend", [
    (0.02, "positive"),
    (0.01, "stable"),
    (0.0, "stable"),
    (-0.01, "stable"),
    (-0.02, "challenging"),
])
def test_classify_trend(avg, trend):
    assert classify_trend(avg) == trend


def test_most_active_day_tie_goes_to_first_bucket():
    entries = [
        make_entry(["work"], timestamp="2024-01-12T09:00:00+00:00"),  # Friday
        make_entry(["work"], timestamp="2024-01-08T09:00:00+00:00"),  # Monday
        make_entry(["work"], timestamp="2024-01-01T09:00:00+00:00"),  # Monday
        make_entry(["work"], timestamp="2024-01-05T09:00:00Z"),       # Friday
    ]
    assert most_active_day(entries) == "Friday"


def test_most_active_day_skips_bad_timestamps():
    assert most_active_day([make_entry(["work"], timestamp="not a date")]) == "Today"


def test_weekly_reflection_positive(ten_entries):
    reflection = weekly_reflection(ten_entries[:4])
    assert reflection.startswith("This week, you've been focusing a lot on work. ")
    assert "generally positive outlook" in reflection


def test_weekly_reflection_challenging():
    entries = [make_entry(["personal_growth"], -0.5)]
    reflection = weekly_reflection(entries)
    assert "personal growth" in reflection
    assert "working through some challenges" in reflection


def test_weekly_reflection_balanced():
    assert "balance" in weekly_reflection([make_entry(["stress"], 0.1)])


def test_weekly_reflection_empty():
    assert weekly_reflection([]) == "Start writing to see your weekly reflection!"


def test_period_metrics(ten_entries):
    now = datetime(2024, 1, 14, 12, 0, tzinfo=timezone.utc)
    for entry in ten_entries:
        entry["wordCount"] = 10

    metrics = period_metrics(ten_entries, days=7, now=now)
    assert metrics["entriesCount"] == 7
    assert metrics["totalWords"] == 70
    assert metrics["averageSentiment"] == pytest.approx(0.2)
    assert metrics["consistencyScore"] == 100
    assert metrics["topThemes"][0] == {"theme": "work", "count": 3}


def test_period_metrics_empty():
    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    metrics = period_metrics([make_entry(["work"])], days=7, now=now)
    assert metrics["entriesCount"] == 0
    assert metrics["topThemes"] == []


def test_filter_entries():
    entries = [
        make_entry(["work"], 0.1, "2024-01-10T09:00:00+00:00", content="Long day at the office", wordCount=5),
        make_entry(["nature"], 0.5, "2024-01-12T09:00:00+00:00", content="A walk in the park", wordCount=5),
        make_entry(["work", "stress"], -0.4, "2024-01-11T09:00:00+00:00", content="Deadline panic", wordCount=2),
    ]
    assert [e["date"] for e in filter_entries(entries)] == ["2024-01-12", "2024-01-11", "2024-01-10"]
    assert [e["sentiment"] for e in filter_entries(entries, sort_by="sentiment")] == [0.5, 0.1, -0.4]
    assert len(filter_entries(entries, theme="work")) == 2
    assert filter_entries(entries, query="PARK")[0]["themes"] == ["nature"]
    assert filter_entries(entries, query="stress")[0]["content"] == "Deadline panic"
    assert filter_entries(entries, theme="all") == filter_entries(entries)


def test_filter_entries_by_time_range():
    now = datetime(2024, 4, 30, 12, 0, tzinfo=timezone.utc)
    entries = [
        make_entry(["work"], timestamp="2024-04-28T09:00:00+00:00", content="days ago"),
        make_entry(["work"], timestamp="2024-04-10T09:00:00+00:00", content="weeks ago"),
        make_entry(["work"], timestamp="2024-03-01T09:00:00+00:00", content="months ago"),
        make_entry(["work"], timestamp="2023-06-01T09:00:00+00:00", content="last year"),
    ]

    def contents(time_range):
        return [e["content"] for e in filter_entries(entries, time_range=time_range, now=now)]

    assert contents("week") == ["days ago"]
    assert contents("month") == ["days ago", "weeks ago"]
    assert contents("quarter") == ["days ago", "weeks ago", "months ago"]
    assert contents("all") == ["days ago", "weeks ago", "months ago", "last year"]


def _metrics(consistency=0, average=0.0, top_theme=None):
    return {
        "averageSentiment": average,
        "consistencyScore": consistency,
        "topThemes": [{"theme": top_theme, "count": 2}] if top_theme else [],
    }


@pytest.mark.parametrize("metrics,opening", [
    (_metrics(consistency=80, average=-0.9, top_theme="personal_growth"), "Excellent consistency"),
    (_metrics(consistency=79, average=0.31, top_theme="personal_growth"), "Your recent entries show a positive"),
    (_metrics(average=-0.5, top_theme="personal_growth"), "You're in a phase of growth"),
    (_metrics(average=-0.21, top_theme="work"), "You're working through challenges"),
    (_metrics(average=-0.2, top_theme="work"), "Your journaling patterns show a balanced"),
    (_metrics(average=0.3), "Your journaling patterns show a balanced"),
])
def test_insight_message_branches(metrics, opening):
    assert insight_message(metrics).startswith(opening)
