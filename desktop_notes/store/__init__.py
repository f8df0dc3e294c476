from .notes_store import MutationResult, MutationStatus, NotesStore

__all__ = ["MutationResult", "MutationStatus", "NotesStore"]
