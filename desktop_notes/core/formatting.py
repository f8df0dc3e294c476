from __future__ import annotations

import math
from datetime import datetime

from desktop_notes.core.models import parse_iso, utc_now

_DAY_SECONDS = 24 * 60 * 60


def word_count(text: str | None) -> int:
    text = (text or "").strip()
    return len(text.split()) if text else 0


def preview_line(content: str | None, *, max_len: int = 80) -> str:
    """First non-empty line of the note body, shortened for the sidebar."""
    for line in (content or "").splitlines():
        line = line.strip()
        if line:
            if len(line) > max_len:
                return line[: max_len - 1].rstrip() + "…"
            return line
    return "No content"


def format_relative_date(value: str | None, *, now: datetime | None = None) -> str:
    """
    Sidebar date label:
        same day         -> "Today"
        second day       -> "Yesterday"
        up to a week     -> "N days ago"
        older            -> local date, YYYY-MM-DD
    Unparseable input gives an empty string.
    """
    if not value:
        return ""
    try:
        moment = parse_iso(value)
    except ValueError:
        return ""

    now = now or utc_now()
    diff = abs((now - moment).total_seconds())
    days = math.ceil(diff / _DAY_SECONDS)

    if days <= 1:
        return "Today"
    if days == 2:
        return "Yesterday"
    if days <= 7:
        return f"{days - 1} days ago"
    return moment.astimezone().strftime("%Y-%m-%d")
