"""
Journal service: runs the annotation pipeline and writes results through
the entry store.

new or edited text -> sentiment + themes -> stored entry -> insights
recomputed over every entry -> next prompt picked from the newest entry's
dominant theme.
"""
import logging
import random
from datetime import datetime, timedelta, timezone

from pymongo.errors import PyMongoError

from moodjournal.errors import ValidationError
from moodjournal.insights import (
    compute_insights,
    filter_entries,
    parse_timestamp,
    period_metrics,
    weekly_reflection,
)
from moodjournal.lexicon import DEFAULT_LEXICON
from moodjournal.prompts import DEFAULT_PROMPT, next_prompt, reflection_prompt
from moodjournal.sentiment import analyze_sentiment, sentiment_label
from moodjournal.themes import extract_themes

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
MIN_CONTENT_LENGTH = 3
MAX_CONTENT_LENGTH = 10000
REFLECTION_MIN_AGE = timedelta(hours=1)
REFLECTION_POOL = 20


# Validation
def validate_entry_input(data):
    errors = []

    if not isinstance(data, dict):
        errors.append("Invalid data format.")
        return errors, {}

    content = data.get("content")
    content = content.strip() if isinstance(content, str) else ""
    if not content:
        errors.append("Content is required.")
    elif len(content) < MIN_CONTENT_LENGTH:
        errors.append("Content is too short, must be at least 3 characters.")
    elif len(content) > MAX_CONTENT_LENGTH:
        errors.append("Content is too long, must be under 10,000 characters.")

    writing_time = data.get("writingTime", 0)
    if isinstance(writing_time, bool) or not isinstance(writing_time, int) or writing_time < 0:
        errors.append("writingTime must be a non-negative integer number of seconds.")
        writing_time = 0

    ai_prompt = data.get("aiPrompt")
    if ai_prompt is not None and not isinstance(ai_prompt, str):
        errors.append("aiPrompt must be text.")
        ai_prompt = None

    return errors, {"content": content, "writingTime": writing_time, "aiPrompt": ai_prompt}


def word_count(text: str) -> int:
    return len(text.split())


class JournalService:
    def __init__(self, store, lexicon=DEFAULT_LEXICON, rng=None):
        self.store = store
        self.lexicon = lexicon
        self.rng = rng or random.Random()

    def analyze(self, text: str) -> dict:
        sentiment = analyze_sentiment(text, self.lexicon)
        return {
            "sentiment": sentiment,
            "label": sentiment_label(sentiment),
            "themes": extract_themes(text, self.lexicon),
        }

    def entries(self) -> list:
        """Every entry, most recent first; empty if the stored data is unreadable."""
        try:
            return self.store.list()
        except (PyMongoError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Could not load journal entries, starting empty: {str(e)}")
            return []

    def get_entry(self, entry_id) -> dict:
        return self.store.get(entry_id)

    def list_entries(self, query=None, theme=None, sort_by="date", time_range=None, now=None) -> list:
        return filter_entries(self.entries(), query=query, theme=theme, sort_by=sort_by,
                              time_range=time_range, now=now)

    def current_prompt(self) -> str:
        prompt, _ = self.store.load_state()
        return prompt

    def insights(self) -> dict:
        return compute_insights(self.entries())

    def reflection(self) -> str:
        return weekly_reflection(self.entries())

    def metrics(self, days: int = 7, now=None) -> dict:
        return period_metrics(self.entries(), days=days, now=now)

    def reflect(self, now=None) -> dict:
        """A random older entry to re-read, with a reflection prompt."""
        cutoff = (now or datetime.now(timezone.utc)) - REFLECTION_MIN_AGE
        old_entries = [
            e for e in self.entries()
            if (parse_timestamp(e.get("timestamp")) or cutoff) < cutoff
        ][:REFLECTION_POOL]
        if not old_entries:
            return {"entry": None, "prompt": None}
        return {"entry": self.rng.choice(old_entries), "prompt": reflection_prompt(self.rng)}

    def _refresh(self, prompt=None) -> dict:
        insights = compute_insights(self.entries())
        self.store.save_state(prompt=prompt, insights=insights)
        return insights

    def add_entry(self, content: str, ai_prompt=None, writing_time: int = 0, timestamp=None) -> dict:
        analysis = self.analyze(content)
        metadata = {
            "sentiment": analysis["sentiment"],
            "themes": analysis["themes"],
            "aiPrompt": ai_prompt if ai_prompt is not None else self.current_prompt(),
            "wordCount": word_count(content),
            "writingTime": writing_time,
        }
        if timestamp is not None:
            metadata["timestamp"] = timestamp

        entry = self.store.append(content, metadata)
        self._refresh(prompt=next_prompt(entry["themes"], self.rng))
        logger.info(f"New entry created: {entry['id']}, {len(entry['themes'])} themes detected.")
        return entry

    def update_entry(self, entry_id, content: str) -> dict:
        analysis = self.analyze(content)
        entry = self.store.update(entry_id, content, {
            "sentiment": analysis["sentiment"],
            "themes": analysis["themes"],
            "wordCount": word_count(content),
        })
        self._refresh()
        logger.info(f"Entry updated: {entry_id}")
        return entry

    def delete_entry(self, entry_id) -> None:
        self.store.remove(entry_id)
        self._refresh()
        logger.info(f"Entry deleted: {entry_id}")

    def clear_all(self) -> None:
        self.store.clear()
        logger.info("All journal data cleared")

    def export_data(self, now=None) -> dict:
        entries = self.entries()
        return {
            "entries": entries,
            "insights": compute_insights(entries),
            "currentPrompt": self.current_prompt(),
            "exportDate": (now or datetime.now(timezone.utc)).isoformat(),
            "version": EXPORT_VERSION,
        }

    def _import_entry(self, entry):
        # entries without text content are rejected by the store
        if not isinstance(entry, dict) or not isinstance(entry.get("content"), str):
            return entry
        entry = dict(entry)
        # keep recorded annotations, fill in whatever is missing
        themes = entry.get("themes")
        if not isinstance(themes, list) or not themes or not all(isinstance(t, str) and t for t in themes):
            entry["themes"] = extract_themes(entry["content"], self.lexicon)
        sentiment = entry.get("sentiment")
        if isinstance(sentiment, bool) or not isinstance(sentiment, (int, float)):
            sentiment = analyze_sentiment(entry["content"], self.lexicon)
        entry["sentiment"] = max(-1.0, min(1.0, float(sentiment)))

        defaults = {"wordCount": word_count(entry["content"]), "writingTime": 0}
        for field, default in defaults.items():
            value = entry.setdefault(field, default)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(f"{field} must be a non-negative integer.")
        return entry

    def import_data(self, document) -> int:
        """Replace the journal with an exported document. Returns the entry count."""
        if not isinstance(document, dict) or not isinstance(document.get("entries"), list):
            raise ValidationError("Import document must contain an entries list.")

        entries = [self._import_entry(entry) for entry in document["entries"]]
        count = self.store.replace_all(entries)
        prompt = document.get("currentPrompt")
        if not isinstance(prompt, str) or not prompt.strip():
            prompt = DEFAULT_PROMPT
        insights = self._refresh(prompt=prompt)
        logger.info(f"Imported {count} entries, {insights['totalEntries']} now stored.")
        return count
