from .editor_session import (
    EditorSession,
    NotesBackend,
    SaveOutcome,
    StatusKind,
    StatusMessage,
)

__all__ = ["EditorSession", "NotesBackend", "SaveOutcome", "StatusKind", "StatusMessage"]
