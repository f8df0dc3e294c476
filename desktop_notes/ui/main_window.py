from __future__ import annotations

from PySide6.QtCore import Qt, QTimer, QSettings
from PySide6.QtGui import QAction, QGuiApplication, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout,
    QListWidget, QListWidgetItem, QLineEdit, QPlainTextEdit, QPushButton,
    QLabel, QMessageBox, QSplitter, QTabWidget, QTextBrowser, QApplication,
)

from desktop_notes.core.formatting import format_relative_date, preview_line
from desktop_notes.core.models import display_title
from desktop_notes.logging_setup import log
from desktop_notes.services.markdown_renderer import MarkdownRenderer
from desktop_notes.session.editor_session import EditorSession, StatusKind
from desktop_notes.settings import APP_NAME, PREVIEW_DEBOUNCE_MS, STATUS_RESET_MS
from desktop_notes.store.notes_store import NotesStore
from desktop_notes.ui.preferences import (
    SettingsKeys, get_str, normalize_theme, restore_window_state, save_window_state,
)
from desktop_notes.ui.qt_utils import blocked_signals

STATUS_COLORS = {
    StatusKind.INFO: "#718096",
    StatusKind.ERROR: "#f56565",
    StatusKind.MODIFIED: "#ed8936",
}

DARK_QSS = """
    QWidget { background: #1a202c; color: #e2e8f0; }
    QLineEdit, QPlainTextEdit, QListWidget, QTextBrowser {
        background: #2d3748; border: 1px solid #4a5568;
    }
    QListWidget::item:selected { background: #4a5568; }
    QPushButton { background: #2d3748; border: 1px solid #4a5568; padding: 4px 12px; }
    QPushButton:disabled { color: #718096; }
"""


class NotesWindow(QMainWindow):
    """
    Qt surface over an EditorSession. The window only forwards user intent
    to the session and redraws from session state afterwards.
    """

    def __init__(self, store: NotesStore, session: EditorSession, *, settings: QSettings | None = None):
        super().__init__()
        self.setWindowTitle("Notes")
        self.store = store
        self.session = session
        self.settings = settings or QSettings(APP_NAME, APP_NAME)
        self.renderer = MarkdownRenderer()
        self.theme = "light"

        # ---- left: search + list ----
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search notes…")
        self.search.setClearButtonEnabled(True)
        self.new_btn = QPushButton("New Note")
        self.listw = QListWidget()
        self.empty_label = QLabel("No notes")
        self.empty_label.setAlignment(Qt.AlignCenter)

        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(8, 8, 8, 8)
        left_layout.addWidget(self.new_btn)
        left_layout.addWidget(self.search)
        left_layout.addWidget(self.listw)
        left_layout.addWidget(self.empty_label)

        # ---- right: editor + preview ----
        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Note title")
        self.content_edit = QPlainTextEdit()
        self.content_edit.setPlaceholderText("Start writing…")
        self.preview = QTextBrowser()
        self.preview.setOpenExternalLinks(True)

        self.tabs = QTabWidget()
        self.tabs.addTab(self.content_edit, "Edit")
        self.tabs.addTab(self.preview, "Preview")

        self.save_btn = QPushButton("Save")
        self.delete_btn = QPushButton("Delete")
        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(self.save_btn)
        buttons.addWidget(self.delete_btn)

        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(8, 8, 8, 8)
        right_layout.addWidget(self.title_edit)
        right_layout.addWidget(self.tabs)
        right_layout.addLayout(buttons)

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.addWidget(left)
        self.splitter.addWidget(right)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 3)
        self.setCentralWidget(self.splitter)

        # ---- status bar ----
        self.status_label = QLabel()
        self.word_label = QLabel()
        self.statusBar().addWidget(self.status_label, 1)
        self.statusBar().addPermanentWidget(self.word_label)

        # Preview debounce (markdown is not rendered on every key press)
        self.preview_timer = QTimer(self)
        self.preview_timer.setInterval(PREVIEW_DEBOUNCE_MS)
        self.preview_timer.setSingleShot(True)
        self.preview_timer.timeout.connect(self._render_preview)

        # Signals
        self.new_btn.clicked.connect(self.new_note)
        self.save_btn.clicked.connect(self.save_note)
        self.delete_btn.clicked.connect(self.confirm_delete)
        self.search.textChanged.connect(self._on_search_changed)
        self.listw.itemClicked.connect(self._on_item_clicked)
        self.title_edit.textChanged.connect(self._on_title_changed)
        self.content_edit.textChanged.connect(self._on_content_changed)

        self._build_menu()
        QShortcut(QKeySequence(Qt.Key_Escape), self, activated=self._on_escape)

        self._restore_ui_state()
        self.render()

    # ---- startup ----

    def deliver_loaded_notes(self) -> None:
        """Push the loaded collection into the session once the event loop runs."""
        QTimer.singleShot(0, lambda: self._on_notes_loaded())

    def _on_notes_loaded(self) -> None:
        self.session.on_notes_loaded(self.store.list())
        self.render()

    # ---- menu ----

    def _build_menu(self) -> None:
        menubar = self.menuBar()

        filem = menubar.addMenu("File")
        act_new = QAction("New Note", self)
        act_new.setShortcut(QKeySequence("Ctrl+N"))
        act_new.triggered.connect(self.new_note)

        act_save = QAction("Save Note", self)
        act_save.setShortcut(QKeySequence("Ctrl+S"))
        act_save.triggered.connect(self.save_note)

        act_exit = QAction("Exit", self)
        act_exit.setShortcut(QKeySequence("Ctrl+Q"))
        act_exit.triggered.connect(self.close)

        filem.addAction(act_new)
        filem.addAction(act_save)
        filem.addSeparator()
        filem.addAction(act_exit)

        editm = menubar.addMenu("Edit")
        for label, method, shortcut in (
            ("Undo", "undo", QKeySequence.Undo),
            ("Redo", "redo", QKeySequence.Redo),
            (None, None, None),
            ("Cut", "cut", QKeySequence.Cut),
            ("Copy", "copy", QKeySequence.Copy),
            ("Paste", "paste", QKeySequence.Paste),
            ("Select All", "selectAll", QKeySequence.SelectAll),
        ):
            if label is None:
                editm.addSeparator()
                continue
            act = QAction(label, self)
            act.setShortcut(shortcut)
            act.triggered.connect(lambda _=False, m=method: self._forward_to_focus(m))
            editm.addAction(act)

        viewm = menubar.addMenu("View")
        act_find = QAction("Find", self)
        act_find.setShortcut(QKeySequence("Ctrl+F"))
        act_find.triggered.connect(self._focus_search)

        act_theme = QAction("Toggle Theme", self)
        act_theme.triggered.connect(self.toggle_theme)

        viewm.addAction(act_find)
        viewm.addAction(act_theme)

    def _forward_to_focus(self, method: str) -> None:
        widget = QApplication.focusWidget()
        fn = getattr(widget, method, None)
        if callable(fn):
            fn()

    def _focus_search(self) -> None:
        self.search.setFocus()
        self.search.selectAll()

    def _on_escape(self) -> None:
        if self.session.is_searching:
            self.search.clear()

    # ---- actions ----

    def new_note(self) -> None:
        self.session.new_note()
        self.render()
        self.title_edit.setFocus()

    def save_note(self) -> None:
        outcome = self.session.save()
        log.debug("Save requested from UI: outcome=%s", outcome.value)
        self.render()

    def confirm_delete(self) -> None:
        if not self.session.can_delete:
            return
        title = display_title(self.session.current.title)
        answer = QMessageBox.question(
            self,
            "Delete note",
            f"Delete \"{title}\"? This cannot be undone.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        self.session.delete()
        self.render()

    def toggle_theme(self) -> None:
        self.apply_theme("dark" if self.theme == "light" else "light")
        self.settings.setValue(SettingsKeys.UI_THEME, self.theme)

    def apply_theme(self, theme: str) -> None:
        self.theme = normalize_theme(theme)
        self.renderer.theme = self.theme
        self.setStyleSheet(DARK_QSS if self.theme == "dark" else "")
        self._render_preview()

    # ---- signals ----

    def _on_search_changed(self, text: str) -> None:
        self.session.search(text)
        self._render_list()
        self._render_status()

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        note_id = item.data(Qt.UserRole)
        if self.session.select(note_id):
            self.render()

    def _on_title_changed(self, text: str) -> None:
        self.session.edit(title=text)
        self._render_status()
        self.preview_timer.start()

    def _on_content_changed(self) -> None:
        self.session.edit(content=self.content_edit.toPlainText())
        self._render_status()
        self.preview_timer.start()

    # ---- rendering ----

    def render(self) -> None:
        self._render_list()
        self._render_editor()
        self._render_status()
        self._render_preview()

    def _render_list(self) -> None:
        notes = self.session.visible_notes
        with blocked_signals(self.listw):
            self.listw.clear()
            for note in notes:
                date = format_relative_date(note.updated_at or note.created_at)
                text = f"{display_title(note.title)}\n{preview_line(note.content)}"
                if date:
                    text = f"{text}\n{date}"
                item = QListWidgetItem(text)
                item.setData(Qt.UserRole, note.id)
                self.listw.addItem(item)
                if self.session.is_active(note):
                    self.listw.setCurrentItem(item)
        self.listw.setVisible(bool(notes))
        self.empty_label.setVisible(not notes)

    def _render_editor(self) -> None:
        current = self.session.current
        with blocked_signals(self.title_edit), blocked_signals(self.content_edit):
            self.title_edit.setText(current.title if current else "")
            self.content_edit.setPlainText(current.content if current else "")
        self.delete_btn.setEnabled(self.session.can_delete)

    def _render_status(self) -> None:
        status = self.session.status
        self.status_label.setText(status.text)
        self.status_label.setStyleSheet(f"color: {STATUS_COLORS[status.kind]};")
        self.word_label.setText(f"{self.session.word_count} words")

        if status.kind is StatusKind.INFO:
            QTimer.singleShot(STATUS_RESET_MS, lambda text=status.text: self._reset_status(text))

    def _reset_status(self, text: str) -> None:
        if self.status_label.text() == text:
            self.status_label.setText("Ready")
            self.status_label.setStyleSheet(f"color: {STATUS_COLORS[StatusKind.INFO]};")

    def _render_preview(self) -> None:
        current = self.session.current
        if current is None:
            self.preview.clear()
            return
        self.preview.setHtml(self.renderer.render_page(current.content, title=current.title))

    # ---- window state ----

    def _restore_ui_state(self) -> None:
        try:
            restore_window_state(self.settings, self, self.splitter)
        except Exception:
            log.exception("Failed to restore UI state from QSettings")

        saved = self.settings.value(SettingsKeys.UI_THEME)
        if saved:
            self.apply_theme(get_str(self.settings, SettingsKeys.UI_THEME, "light"))
        else:
            self.apply_theme("dark" if _system_prefers_dark() else "light")

    def _save_ui_state(self) -> None:
        try:
            save_window_state(self.settings, self, self.splitter)
        except Exception:
            log.exception("Failed to save UI state to QSettings")

    def closeEvent(self, event):  # type: ignore[override]
        if self.preview_timer.isActive():
            self.preview_timer.stop()
        self._save_ui_state()
        self.store.close()
        super().closeEvent(event)


def _system_prefers_dark() -> bool:
    hints = QGuiApplication.styleHints()
    scheme = getattr(hints, "colorScheme", None)
    if scheme is None:
        return False
    return scheme() == Qt.ColorScheme.Dark
