from .main_window import NotesWindow

__all__ = ["NotesWindow"]
