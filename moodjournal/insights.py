"""
Aggregate insights over the journal.

Every function here is a full recompute over the entries it is given (most
recent first) and keeps no state between calls.
"""
from collections import Counter
from datetime import date, datetime, timedelta, timezone

RECENT_WINDOW = 7
TOP_THEMES = 3
TREND_THRESHOLD = 0.01
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

DEFAULT_INSIGHTS = {
    "weeklyThemes": [],
    "sentimentTrend": "stable",
    "mostActiveDay": "Today",
    "totalEntries": 0,
}


def parse_timestamp(value):
    """ISO-8601 string (or datetime) to datetime; None when unparseable."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _average_sentiment(entries) -> float:
    if not entries:
        return 0.0
    return sum(e.get("sentiment", 0) for e in entries) / len(entries)


def _theme_counts(entries) -> Counter:
    # Counter keeps first-encountered order, most_common() is stable on ties
    all_themes = []
    for e in entries:
        all_themes.extend(e.get("themes") or [])
    return Counter(all_themes)


def classify_trend(avg_sentiment: float, threshold: float = TREND_THRESHOLD) -> str:
    if avg_sentiment > threshold:
        return "positive"
    if avg_sentiment < -threshold:
        return "challenging"
    return "stable"


def most_active_day(entries) -> str:
    day_count = Counter()
    for e in entries:
        ts = parse_timestamp(e.get("timestamp"))
        if ts is not None:
            day_count[WEEKDAYS[ts.weekday()]] += 1
    if not day_count:
        return "Today"
    return day_count.most_common(1)[0][0]


def compute_insights(entries) -> dict:
    """Insights snapshot for ``entries`` (most recent first)."""
    recent = list(entries[:RECENT_WINDOW])
    theme_counts = _theme_counts(recent)
    return {
        "weeklyThemes": [theme for theme, count in theme_counts.most_common(TOP_THEMES)],
        "sentimentTrend": classify_trend(_average_sentiment(recent)),
        "mostActiveDay": most_active_day(entries),
        "totalEntries": len(entries),
    }


def weekly_reflection(entries) -> str:
    recent = list(entries[:RECENT_WINDOW])
    if not recent:
        return "Start writing to see your weekly reflection!"

    top = _theme_counts(recent).most_common(1)
    if not top:
        return "Keep writing to build your reflection!"

    avg_sentiment = _average_sentiment(recent)
    reflection = f"This week, you've been focusing a lot on {top[0][0].replace('_', ' ')}. "
    if avg_sentiment > 0.2:
        reflection += ("Your entries show a generally positive outlook, with moments of "
                       "gratitude and growth shining through.")
    elif avg_sentiment < -0.2:
        reflection += ("It seems like you've been working through some challenges. Remember "
                       "that difficult periods often lead to the most growth.")
    else:
        reflection += ("You're navigating life with balance, acknowledging both challenges "
                       "and positive moments.")
    return reflection


def _entry_date(entry):
    value = entry.get("date")
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        ts = parse_timestamp(entry.get("timestamp"))
        return ts.date() if ts else None


def entries_since(entries, days: int, now=None) -> list:
    now = now or datetime.now(timezone.utc)
    cutoff = now.date() - timedelta(days=days)
    return [e for e in entries if (_entry_date(e) or date.min) >= cutoff]


def period_metrics(entries, days: int = 7, now=None) -> dict:
    """Dashboard metrics over the entries written in the last ``days`` days."""
    items = entries_since(entries, days, now)
    if not items:
        return {
            "averageSentiment": 0,
            "totalWords": 0,
            "entriesCount": 0,
            "topThemes": [],
            "sentimentTrend": "stable",
            "consistencyScore": 0,
        }

    avg_sentiment = _average_sentiment(items)
    return {
        "averageSentiment": round(avg_sentiment, 3),
        "totalWords": sum(e.get("wordCount") or 0 for e in items),
        "entriesCount": len(items),
        "topThemes": [
            {"theme": theme, "count": count}
            for theme, count in _theme_counts(items).most_common(5)
        ],
        "sentimentTrend": classify_trend(avg_sentiment, threshold=0.2),
        "consistencyScore": min(100, round(len(items) / days * 100)),
    }


def insight_message(metrics: dict) -> str:
    """One-line reading of ``period_metrics`` output."""
    top_themes = metrics.get("topThemes") or []
    if metrics["consistencyScore"] >= 80:
        return ("Excellent consistency! Your regular journaling practice is building "
                "strong self-awareness.")
    if metrics["averageSentiment"] > 0.3:
        return ("Your recent entries show a positive outlook. You're finding joy and "
                "gratitude in your experiences.")
    if top_themes and top_themes[0]["theme"] == "personal_growth":
        return ("You're in a phase of growth and self-discovery. Your reflections show "
                "deep introspection.")
    if metrics["averageSentiment"] < -0.2:
        return ("You're working through challenges with courage. Remember that difficult "
                "periods often lead to growth.")
    return "Your journaling patterns show a balanced approach to reflection and self-awareness."


TIME_RANGES = {"week": 7, "month": 30, "quarter": 90}

SORT_KEYS = {
    "date": lambda e: e.get("date") or "",
    "sentiment": lambda e: e.get("sentiment", 0),
    "length": lambda e: e.get("wordCount") or 0,
}


def filter_entries(entries, query=None, theme=None, sort_by="date", time_range=None, now=None) -> list:
    """Search, filter by theme and time range, and sort (descending) a list of entries."""
    filtered = list(entries)

    if time_range in TIME_RANGES:
        filtered = entries_since(filtered, TIME_RANGES[time_range], now)

    if query and query.strip():
        q = query.strip().lower()
        filtered = [
            e for e in filtered
            if q in (e.get("content") or "").lower()
            or any(q in t.lower() for t in e.get("themes") or [])
            or q in (e.get("aiPrompt") or "").lower()
        ]

    if theme and theme != "all":
        filtered = [e for e in filtered if theme in (e.get("themes") or [])]

    key = SORT_KEYS.get(sort_by, SORT_KEYS["date"])
    return sorted(filtered, key=key, reverse=True)
