from __future__ import annotations
from pathlib import Path

APP_NAME = "desktop-notes"
DATA_DIR = Path.home() / f".{APP_NAME}"
NOTES_PATH = DATA_DIR / "notes.json"
LOG_DIR = DATA_DIR / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"

DEFAULT_TITLE = "Untitled Note"

STATUS_RESET_MS = 3000
PREVIEW_DEBOUNCE_MS = 250
