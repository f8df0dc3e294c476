from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from desktop_notes.settings import DEFAULT_TITLE


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """
    ISO-8601 in UTC with millisecond precision and a trailing "Z",
    e.g. 2024-05-01T10:20:30.123Z
    """
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    # fromisoformat() only learned about "Z" in 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def display_title(title: str | None) -> str:
    title = title or ""
    return title if title.strip() else DEFAULT_TITLE


@dataclass
class Note:
    title: str = ""
    content: str = ""
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_draft(self) -> bool:
        return not self.id

    @property
    def is_blank(self) -> bool:
        return not self.title.strip() and not self.content.strip()

    def copy(self, **changes: Any) -> "Note":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Note":
        """
        Build a note from its JSON object. Raises ValueError on a shape
        that cannot be a note; unknown keys are ignored.
        """
        if not isinstance(data, dict):
            raise ValueError(f"note must be an object, got {type(data).__name__}")

        title = data.get("title")
        content = data.get("content")
        if not isinstance(title, str) or not isinstance(content, str):
            raise ValueError("note title and content must be strings")

        optional = {}
        for key in ("id", "createdAt", "updatedAt"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"note field {key!r} must be a string or null")
            optional[key] = value

        return cls(
            title=title,
            content=content,
            id=optional["id"] or None,
            created_at=optional["createdAt"],
            updated_at=optional["updatedAt"],
        )
