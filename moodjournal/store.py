"""
MongoDB-backed entry store.

The store only persists what it is given: sentiment and themes are computed
by the caller (see ``moodjournal.journal``) and written through on every
mutation. Entries are returned as plain dicts with camelCase keys and ISO-8601
timestamps, most recent first.
"""
import logging
from datetime import datetime, timezone

from bson.objectid import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from moodjournal.errors import EntryNotFound, ValidationError
from moodjournal.insights import DEFAULT_INSIGHTS, parse_timestamp
from moodjournal.prompts import DEFAULT_PROMPT

logger = logging.getLogger(__name__)

STATE_ID = "journal"
ENTRY_FIELDS = ("content", "sentiment", "themes", "aiPrompt", "wordCount", "writingTime")


def _utc(value: datetime) -> datetime:
    # pymongo hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _object_id(entry_id):
    if isinstance(entry_id, ObjectId):
        return entry_id
    if not ObjectId.is_valid(str(entry_id)):
        raise EntryNotFound(entry_id)
    return ObjectId(str(entry_id))


def format_entry(doc: dict) -> dict:
    entry = {k: v for k, v in doc.items() if k != "_id"}
    entry["id"] = str(doc["_id"])
    if hasattr(doc.get("timestamp"), "isoformat"):
        entry["timestamp"] = _utc(doc["timestamp"]).isoformat()
    if hasattr(doc.get("lastModified"), "isoformat"):
        entry["lastModified"] = _utc(doc["lastModified"]).isoformat()
    return entry


class EntryStore:
    def __init__(self, entries, state):
        self.entries = entries
        self.state = state

    @classmethod
    def from_database(cls, db):
        return cls(db.entries, db.app_state)

    def setup_indexes(self):
        self.entries.create_index([("timestamp", DESCENDING)])
        self.entries.create_index([("themes", ASCENDING)])
        self.entries.create_index([("date", DESCENDING), ("sentiment", ASCENDING)])

    def append(self, content: str, metadata: dict) -> dict:
        timestamp = _utc(metadata.get("timestamp") or datetime.now(timezone.utc))
        # BSON dates only keep milliseconds
        timestamp = timestamp.replace(microsecond=timestamp.microsecond // 1000 * 1000)
        doc = {k: metadata[k] for k in ENTRY_FIELDS if k in metadata}
        doc.update({
            "content": content,
            "date": timestamp.date().isoformat(),
            "timestamp": timestamp,
        })
        result = self.entries.insert_one(doc)
        doc["_id"] = result.inserted_id
        return format_entry(doc)

    def get(self, entry_id) -> dict:
        doc = self.entries.find_one({"_id": _object_id(entry_id)})
        if doc is None:
            raise EntryNotFound(entry_id)
        return format_entry(doc)

    def update(self, entry_id, content: str, metadata=None) -> dict:
        changes = {k: v for k, v in (metadata or {}).items() if k in ENTRY_FIELDS}
        changes["content"] = content
        changes["lastModified"] = datetime.now(timezone.utc)
        result = self.entries.update_one({"_id": _object_id(entry_id)}, {"$set": changes})
        if result.matched_count == 0:
            raise EntryNotFound(entry_id)
        return self.get(entry_id)

    def remove(self, entry_id) -> None:
        result = self.entries.delete_one({"_id": _object_id(entry_id)})
        if result.deleted_count == 0:
            raise EntryNotFound(entry_id)

    def list(self) -> list:
        cursor = self.entries.find().sort([("timestamp", DESCENDING), ("_id", DESCENDING)])
        return [format_entry(doc) for doc in cursor]

    def clear(self) -> None:
        self.entries.delete_many({})
        self.state.delete_many({})

    def replace_all(self, entries) -> int:
        """Replace every stored entry with ``entries`` (an export's list)."""
        docs = [self._import_doc(e) for e in entries]
        ids = [doc["_id"] for doc in docs if "_id" in doc]
        if len(ids) != len(set(ids)):
            raise ValidationError("Import contains duplicate entry ids.")

        previous = list(self.entries.find())
        self.entries.delete_many({})
        try:
            if docs:
                self.entries.insert_many(docs)
        except PyMongoError as e:
            logger.error(f"Import failed, restoring {len(previous)} entries: {str(e)}")
            self.entries.delete_many({})
            if previous:
                self.entries.insert_many(previous)
            raise
        return len(docs)

    @staticmethod
    def _import_doc(entry) -> dict:
        if not isinstance(entry, dict) or not isinstance(entry.get("content"), str):
            raise ValidationError("Each entry needs a text content field.")
        timestamp = parse_timestamp(entry.get("timestamp"))
        if timestamp is None:
            raise ValidationError(f"Entry has an invalid timestamp: {entry.get('timestamp')!r}")
        timestamp = _utc(timestamp)
        doc = {k: entry[k] for k in ENTRY_FIELDS if k in entry}
        doc["timestamp"] = timestamp
        doc["date"] = entry.get("date") or timestamp.date().isoformat()
        modified = parse_timestamp(entry.get("lastModified"))
        if modified is not None:
            doc["lastModified"] = _utc(modified)
        if ObjectId.is_valid(str(entry.get("id", ""))):
            doc["_id"] = ObjectId(str(entry["id"]))
        return doc

    def load_state(self):
        """Current prompt and last insights snapshot, defaults when missing or malformed."""
        prompt, insights = DEFAULT_PROMPT, dict(DEFAULT_INSIGHTS)
        try:
            doc = self.state.find_one({"_id": STATE_ID})
        except PyMongoError as e:
            logger.warning(f"Could not load journal state: {str(e)}")
            return prompt, insights
        if not doc:
            return prompt, insights

        if isinstance(doc.get("currentPrompt"), str) and doc["currentPrompt"].strip():
            prompt = doc["currentPrompt"]
        else:
            logger.warning("Stored prompt is malformed, using the default prompt")
        stored = doc.get("insights")
        if isinstance(stored, dict) and set(DEFAULT_INSIGHTS) <= set(stored):
            insights = {k: stored[k] for k in DEFAULT_INSIGHTS}
        else:
            logger.warning("Stored insights are malformed, using defaults")
        return prompt, insights

    def save_state(self, prompt=None, insights=None) -> bool:
        changes = {}
        if prompt is not None:
            changes["currentPrompt"] = prompt
        if insights is not None:
            changes["insights"] = insights
        if not changes:
            return True
        try:
            self.state.update_one({"_id": STATE_ID}, {"$set": changes}, upsert=True)
            return True
        except PyMongoError as e:
            logger.error(f"Error saving journal state: {str(e)}")
            return False
