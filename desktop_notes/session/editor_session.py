"""
Front-end state for the notes window.

The session keeps the note being edited and the last collection the backend
returned. It never touches the backend's collection directly: every change
goes through list/save/delete/search and the returned collection replaces
the local one.

States:
    Drafting          current.id is None (new note, after save, empty store)
    Editing-existing  a copy of a stored note is loaded
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol

from desktop_notes.core.errors import NoteNotFoundError
from desktop_notes.core.formatting import word_count
from desktop_notes.core.models import Note, display_title
from desktop_notes.logging_setup import log
from desktop_notes.store.notes_store import MutationResult, MutationStatus


class NotesBackend(Protocol):
    def list(self) -> list[Note]: ...

    def save(self, note: Note) -> MutationResult: ...

    def delete(self, note_id: str) -> MutationResult: ...

    def search(self, query: str | None) -> list[Note]: ...


class StatusKind(enum.Enum):
    INFO = "info"
    ERROR = "error"
    MODIFIED = "modified"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    kind: StatusKind = StatusKind.INFO


READY = StatusMessage("Ready")
WRITE_FAILED = "could not write notes file"


class SaveOutcome(enum.Enum):
    SAVED = "saved"
    SAVED_IN_MEMORY = "saved_in_memory"
    NOT_FOUND = "not_found"
    REFUSED_EMPTY = "refused_empty"


class EditorSession:
    def __init__(self, backend: NotesBackend):
        self._backend = backend
        self.notes: list[Note] = []
        self.visible_notes: list[Note] = []
        self.current: Note | None = None
        self.modified = False
        self.query = ""
        self.status = READY
        self.loaded = False

    # ---- backend -> session ----

    def on_notes_loaded(self, notes: list[Note]) -> None:
        """One-shot startup notification from the backend."""
        if self.loaded:
            log.debug("Duplicate notes-loaded notification ignored")
            return
        self.loaded = True
        self._apply_collection(notes)
        log.info("Session received notes: count=%d", len(self.notes))

        if self.notes:
            self.select(self.notes[0].id)
        else:
            self.new_note()

    def refresh(self) -> None:
        self._apply_collection(self._backend.list())

    # ---- user intent ----

    @property
    def is_searching(self) -> bool:
        # whitespace alone does not filter the list, but a real query is sent as typed
        return bool(self.query.strip())

    @property
    def can_delete(self) -> bool:
        return self.current is not None and not self.current.is_draft

    @property
    def word_count(self) -> int:
        return word_count(self.current.content if self.current else "")

    def is_active(self, note: Note) -> bool:
        return self.current is not None and bool(note.id) and self.current.id == note.id

    def new_note(self) -> Note:
        self.current = Note()
        self.modified = False
        self._set_status("New note created")
        return self.current

    def select(self, note_id: str | None) -> bool:
        note = self._find(note_id)
        if note is None:
            log.debug("Select of unknown note ignored: id=%s", note_id)
            return False
        self.current = note.copy()
        self.modified = False
        self._set_status("Note loaded")
        return True

    def edit(self, *, title: str | None = None, content: str | None = None) -> None:
        if self.current is None:
            self.new_note()
        changes = {}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        if not changes:
            return
        self.current = self.current.copy(**changes)
        self.modified = True
        self._set_status("Modified", StatusKind.MODIFIED)

    def save(self) -> SaveOutcome:
        if self.current is None:
            self.new_note()
            return SaveOutcome.REFUSED_EMPTY

        if self.current.is_blank:
            self._set_status("Cannot save empty note", StatusKind.ERROR)
            return SaveOutcome.REFUSED_EMPTY

        outgoing = self.current.copy(title=display_title(self.current.title))
        try:
            result = self._backend.save(outgoing)
        except NoteNotFoundError:
            log.warning("Save failed, note no longer exists: id=%s", outgoing.id)
            self.refresh()
            self.new_note()
            self._set_status("Note no longer exists", StatusKind.ERROR)
            return SaveOutcome.NOT_FOUND

        self._apply_collection(result.notes)
        # editor always starts over on a fresh draft, for updates too
        self.new_note()

        if result.status is MutationStatus.NOT_FOUND:
            self._set_status("Note no longer exists", StatusKind.ERROR)
            return SaveOutcome.NOT_FOUND
        if not result.persisted:
            self._set_status(f"Saved, but {WRITE_FAILED}", StatusKind.ERROR)
            return SaveOutcome.SAVED_IN_MEMORY
        self._set_status("Note saved")
        return SaveOutcome.SAVED

    def delete(self) -> bool:
        if not self.can_delete:
            return False

        result = self._backend.delete(self.current.id)
        self._apply_collection(result.notes)

        if self.notes:
            self.select(self.notes[0].id)
        else:
            self.new_note()

        if not result.persisted:
            self._set_status(f"Deleted, but {WRITE_FAILED}", StatusKind.ERROR)
        else:
            self._set_status("Note deleted")
        return result.status is MutationStatus.DELETED

    def search(self, query: str | None) -> list[Note]:
        self.query = query or ""
        if self.is_searching:
            self.visible_notes = self._backend.search(self.query)
            self._set_status(f"Found {len(self.visible_notes)} results")
        else:
            self.visible_notes = self._backend.search("")
            self.status = READY
        return self.visible_notes

    def clear_search(self) -> None:
        self.search("")

    # ---- internals ----

    def _apply_collection(self, notes: list[Note]) -> None:
        self.notes = list(notes)
        if self.is_searching:
            self.visible_notes = self._backend.search(self.query)
        else:
            self.visible_notes = list(self.notes)

    def _find(self, note_id: str | None) -> Note | None:
        if not note_id:
            return None
        for n in self.notes:
            if n.id == note_id:
                return n
        return None

    def _set_status(self, text: str, kind: StatusKind = StatusKind.INFO) -> None:
        self.status = StatusMessage(text, kind)
