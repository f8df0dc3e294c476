from datetime import datetime, timezone

import pytest

from desktop_notes.core.models import Note, display_title, parse_iso, to_iso


def test_to_iso_uses_z_suffix_and_millis():
    moment = datetime(2024, 5, 1, 10, 20, 30, 123456, tzinfo=timezone.utc)
    assert to_iso(moment) == "2024-05-01T10:20:30.123Z"


def test_parse_iso_accepts_z():
    assert parse_iso("2024-05-01T10:20:30.123Z") == datetime(
        2024, 5, 1, 10, 20, 30, 123000, tzinfo=timezone.utc
    )


def test_display_title():
    assert display_title("") == "Untitled Note"
    assert display_title(" \n") == "Untitled Note"
    assert display_title(None) == "Untitled Note"
    assert display_title("Hi") == "Hi"


def test_from_dict_ignores_unknown_keys():
    note = Note.from_dict({"id": "7", "title": "T", "content": "C", "pinned": True})
    assert note == Note(title="T", content="C", id="7")


def test_dict_round_trip():
    note = Note(title="T", content="C", id="1",
                created_at="2024-01-01T00:00:00.000Z", updated_at="2024-01-02T00:00:00.000Z")
    assert Note.from_dict(note.to_dict()) == note


@pytest.mark.parametrize("data", [
    [],
    "note",
    {"title": 1, "content": ""},
    {"title": "T"},
    {"title": "T", "content": "", "createdAt": 5},
])
def test_from_dict_rejects_bad_shapes(data):
    with pytest.raises(ValueError):
        Note.from_dict(data)


def test_blank_and_draft():
    assert Note().is_draft
    assert Note(title=" ", content="\t").is_blank
    assert not Note(title="", content="x").is_blank
