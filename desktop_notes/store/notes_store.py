"""
Authoritative notes collection, persisted as one JSON array.

Newest notes sit at the front; the order on disk is the display order.
Every mutation rewrites the whole file and returns the whole collection.
"""
from __future__ import annotations

import enum
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from desktop_notes.core.errors import NoteNotFoundError, StoreClosedError
from desktop_notes.core.models import Note, display_title, to_iso, utc_now
from desktop_notes.logging_setup import log
from desktop_notes.store.filesystem import read_json, write_json


class MutationStatus(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class MutationResult:
    notes: list[Note]
    status: MutationStatus
    note: Note | None = None
    write_error: OSError | None = None

    @property
    def persisted(self) -> bool:
        return self.write_error is None


def _new_id() -> str:
    return uuid.uuid4().hex


def matches(note: Note, needle: str) -> bool:
    """needle must already be lowercased."""
    return needle in note.title.lower() or needle in note.content.lower()


class NotesStore:
    def __init__(
        self,
        path: Path,
        *,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
        strict_updates: bool = False,
    ):
        self.path = Path(path)
        self.strict_updates = strict_updates
        self._clock = clock or utc_now
        self._id_factory = id_factory or _new_id
        self._notes: list[Note] = []
        self._lock = threading.RLock()
        self._closed = False

    # ---- lifecycle ----

    def __enter__(self) -> "NotesStore":
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        with self._lock:
            if not self._closed:
                log.info("Notes store closed: path=%s notes=%d", self.path, len(self._notes))
            self._closed = True

    def load(self) -> list[Note]:
        """
        Read the backing file. A missing, unreadable or malformed file
        starts an empty collection; nothing is raised.
        """
        with self._lock:
            self._ensure_open()
            self._notes = self._read_file()
            log.info("Notes loaded: path=%s count=%d", self.path, len(self._notes))
            return self._snapshot()

    def _read_file(self) -> list[Note]:
        if not self.path.exists():
            log.info("Notes file does not exist yet: %s", self.path)
            return []
        try:
            raw = read_json(self.path)
        except (OSError, ValueError, RecursionError) as e:
            log.warning("Notes file unreadable, starting empty: %s (%s)", self.path, e)
            return []

        if not isinstance(raw, list):
            log.warning("Notes file is not a JSON array, starting empty: %s", self.path)
            return []

        notes: list[Note] = []
        seen: set[str] = set()
        for item in raw:
            try:
                note = Note.from_dict(item)
            except ValueError as e:
                log.warning("Invalid note entry, starting empty: %s (%s)", self.path, e)
                return []
            if note.id is None or note.id in seen:
                log.warning("Missing or duplicate note id %r, starting empty: %s", note.id, self.path)
                return []
            seen.add(note.id)
            notes.append(note)
        return notes

    # ---- operations ----

    def list(self) -> list[Note]:
        with self._lock:
            self._ensure_open()
            return self._snapshot()

    def save(self, note: Note) -> MutationResult:
        with self._lock:
            self._ensure_open()
            now = to_iso(self._clock())
            title = display_title(note.title)

            if note.id:
                index = self._index_of(note.id)
                if index is None:
                    if self.strict_updates:
                        log.warning("Save rejected, note not found: id=%s", note.id)
                        raise NoteNotFoundError(note.id)
                    log.warning("Save of unknown note ignored: id=%s", note.id)
                    return self._commit(MutationStatus.NOT_FOUND)

                existing = self._notes[index]
                stored = existing.copy(
                    title=title,
                    content=note.content,
                    created_at=existing.created_at or now,
                    updated_at=now,
                )
                self._notes[index] = stored
                log.info("Note updated: id=%s index=%d", stored.id, index)
                return self._commit(MutationStatus.UPDATED, stored)

            stored = Note(
                title=title,
                content=note.content,
                id=self._unused_id(),
                created_at=now,
                updated_at=now,
            )
            self._notes.insert(0, stored)
            log.info("Note created: id=%s count=%d", stored.id, len(self._notes))
            return self._commit(MutationStatus.CREATED, stored)

    def delete(self, note_id: str) -> MutationResult:
        with self._lock:
            self._ensure_open()
            index = self._index_of(note_id) if note_id else None
            if index is None:
                log.debug("Delete of unknown note ignored: id=%s", note_id)
                return self._commit(MutationStatus.NOT_FOUND)

            removed = self._notes.pop(index)
            log.info("Note deleted: id=%s count=%d", removed.id, len(self._notes))
            return self._commit(MutationStatus.DELETED)

    def search(self, query: str | None) -> list[Note]:
        with self._lock:
            self._ensure_open()
            needle = (query or "").lower()
            if not needle:
                return self._snapshot()
            return [n.copy() for n in self._notes if matches(n, needle)]

    # ---- internals ----

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError(f"notes store is closed: {self.path}")

    def _snapshot(self) -> list[Note]:
        return [n.copy() for n in self._notes]

    def _index_of(self, note_id: str) -> int | None:
        for i, n in enumerate(self._notes):
            if n.id == note_id:
                return i
        return None

    def _unused_id(self) -> str:
        existing = {n.id for n in self._notes}
        new_id = self._id_factory()
        while not new_id or new_id in existing:
            log.debug("Generated note id collided, retrying: %r", new_id)
            new_id = self._id_factory()
        return new_id

    def _commit(self, status: MutationStatus, note: Note | None = None) -> MutationResult:
        write_error = self._persist()
        return MutationResult(
            notes=self._snapshot(),
            status=status,
            note=note.copy() if note is not None else None,
            write_error=write_error,
        )

    def _persist(self) -> OSError | None:
        try:
            write_json(self.path, [n.to_dict() for n in self._notes])
        except OSError as e:
            # memory keeps the mutation; caller learns about it from the result
            log.exception("Failed to write notes file: %s", self.path)
            return e
        log.debug("Notes file written: path=%s count=%d", self.path, len(self._notes))
        return None
