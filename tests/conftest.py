import random

import mongomock
import pytest

from moodjournal.app import create_app
from moodjournal.journal import JournalService
from moodjournal.store import EntryStore


@pytest.fixture
def store():
    """Entry store on an in-memory MongoDB."""
    return EntryStore.from_database(mongomock.MongoClient().db)


@pytest.fixture
def journal(store):
    return JournalService(store, rng=random.Random(7))


@pytest.fixture
def app(store):
    return create_app({"TESTING": True}, store=store)


@pytest.fixture
def client(app):
    return app.test_client()


def make_entry(themes, sentiment=0.0, timestamp="2024-01-14T10:00:00+00:00", **extra):
    entry = {
        "content": extra.pop("content", "entry"),
        "themes": themes,
        "sentiment": sentiment,
        "timestamp": timestamp,
        "date": timestamp[:10],
    }
    entry.update(extra)
    return entry
