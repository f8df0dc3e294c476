from datetime import datetime, timedelta, timezone

from desktop_notes.core.formatting import format_relative_date, preview_line, word_count
from desktop_notes.core.models import to_iso

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def ago(**kw):
    return to_iso(NOW - timedelta(**kw))


def test_relative_date_buckets():
    assert format_relative_date(ago(hours=3), now=NOW) == "Today"
    assert format_relative_date(ago(seconds=0), now=NOW) == "Today"
    assert format_relative_date(ago(hours=30), now=NOW) == "Yesterday"
    assert format_relative_date(ago(days=4, hours=1), now=NOW) == "4 days ago"


def test_relative_date_old_shows_date():
    value = ago(days=30)
    expected = (NOW - timedelta(days=30)).astimezone().strftime("%Y-%m-%d")
    assert format_relative_date(value, now=NOW) == expected


def test_relative_date_bad_input():
    assert format_relative_date(None, now=NOW) == ""
    assert format_relative_date("yesterday-ish", now=NOW) == ""


def test_word_count():
    assert word_count("") == 0
    assert word_count("   ") == 0
    assert word_count("a b\n c\td") == 4


def test_preview_line():
    assert preview_line("") == "No content"
    assert preview_line("\n\n  second line\nthird") == "second line"
    long = "x" * 100
    assert preview_line(long, max_len=10) == "x" * 9 + "…"
