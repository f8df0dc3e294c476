from __future__ import annotations


class NotesError(Exception):
    """Base class for notes store errors."""


class NoteNotFoundError(NotesError):
    def __init__(self, note_id: str):
        super().__init__(f"note not found: {note_id}")
        self.note_id = note_id


class StoreClosedError(NotesError):
    """Raised when an operation is issued on a store that was closed."""
