from .errors import NotesError, NoteNotFoundError, StoreClosedError
from .models import Note, display_title, to_iso, parse_iso, utc_now
from .formatting import format_relative_date, preview_line, word_count

__all__ = ["NotesError",
           "NoteNotFoundError",
           "StoreClosedError",
           "Note",
           "display_title",
           "to_iso",
           "parse_iso",
           "utc_now",
           "format_relative_date",
           "preview_line",
           "word_count",
           ]
