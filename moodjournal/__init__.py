from moodjournal.insights import compute_insights, weekly_reflection
from moodjournal.prompts import next_prompt
from moodjournal.sentiment import analyze_sentiment
from moodjournal.themes import extract_themes

__all__ = [
    "analyze_sentiment",
    "compute_insights",
    "extract_themes",
    "next_prompt",
    "weekly_reflection",
]
