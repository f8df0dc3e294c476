import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from desktop_notes.store.notes_store import NotesStore


class TickingClock:
    """Returns a new moment, one second later, on every call."""
    def __init__(self, start=datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def notes_path(tmp_path):
    return tmp_path / "notes.json"


@pytest.fixture
def store(notes_path, clock):
    s = NotesStore(notes_path, clock=clock)
    s.load()
    yield s
    s.close()
