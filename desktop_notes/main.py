from __future__ import annotations

import argparse
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from desktop_notes.logging_setup import install_global_exception_hooks, log, setup_logging, SESSION_ID
from desktop_notes.session.editor_session import EditorSession
from desktop_notes.settings import APP_NAME, NOTES_PATH
from desktop_notes.store.notes_store import NotesStore
from desktop_notes.ui.main_window import NotesWindow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog=APP_NAME, description="Simple desktop notes")
    p.add_argument(
        "--notes-file",
        type=Path,
        default=NOTES_PATH,
        help="JSON file holding the notes (default: %(default)s)",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()
    install_global_exception_hooks()

    app = QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)

    store = NotesStore(args.notes_file)
    store.load()
    session = EditorSession(store)

    win = NotesWindow(store, session)
    win.show()
    win.deliver_loaded_notes()
    log.info("Application started, notes_file=%s SID=%s", args.notes_file, SESSION_ID)

    try:
        return app.exec()
    finally:
        store.close()


if __name__ == "__main__":
    raise SystemExit(main())
