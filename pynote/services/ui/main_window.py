from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PyQt6.QtCore import QByteArray
from PyQt6.QtGui import QAction, QActionGroup, QFont, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow,
    QMenu,
    QPlainTextEdit,
    QStatusBar,
    QTabBar,
    QVBoxLayout,
    QWidget,
)

from pynote.domain.interfaces import ISettingsService
from pynote.domain.models import Document, ExecutionOutcome, Template, Theme
from pynote.services.ui.adapters.qt_editor import QtEditorSurface
from pynote.services.ui.presenters.main_presenter import Intent
from pynote.services.ui.runner_dialog import RunnerDialog
from pynote.services.ui.templates_dialog import TemplatesDialog
from pynote.services.ui.themes import THEMES, editor_stylesheet
from pynote.utils.constants import APP_NAME, MAX_RECENTS, TAB_SIZE

if TYPE_CHECKING:
    from pynote.services.ui.presenters.main_presenter import MainPresenter

# Ctrl+3..6 insert the built-in templates in this order.
TEMPLATE_SHORTCUTS = (
    ("csharp", "Ctrl+3"),
    ("cpp", "Ctrl+4"),
    ("python", "Ctrl+5"),
    ("java", "Ctrl+6"),
)


class MainWindow(QMainWindow):
    """
    Passive Qt view: a tab strip over one shared editor plus a non-modal
    runner dialog. Every user action is forwarded to the presenter as an
    Intent; the presenter calls back through the IMainView methods below.
    """

    def __init__(
        self,
        settings: ISettingsService,
        *,
        tab_size: int = TAB_SIZE,
        app_title: str = APP_NAME,
    ) -> None:
        super().__init__()
        self.setWindowTitle(app_title)
        self.resize(1100, 700)

        self.settings = settings
        self._presenter: MainPresenter | None = None
        self._tab_ids: list[int] = []

        # Widgets
        self.tabs = QTabBar(self)
        self.tabs.setTabsClosable(True)
        self.tabs.setMovable(False)
        self.tabs.setExpanding(False)
        self.tabs.setDocumentMode(True)

        self.editor = QPlainTextEdit(self)
        font = QFont("monospace")
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.editor.setFont(font)
        self.editor.setTabStopDistance(tab_size * self.editor.fontMetrics().horizontalAdvance(" "))
        self.editor_surface = QtEditorSurface(self.editor)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.tabs)
        layout.addWidget(self.editor, 1)
        self.setCentralWidget(central)

        self.runner = RunnerDialog(self)
        self.templates_dialog = TemplatesDialog(self)

        # Signals
        self.editor.textChanged.connect(lambda: self._dispatch(Intent.CONTENT_CHANGED))
        self.tabs.currentChanged.connect(self._on_tab_changed)
        self.tabs.tabCloseRequested.connect(self._on_tab_close)
        self.runner.run_requested.connect(lambda: self._dispatch(Intent.RUN))
        self.runner.clear_requested.connect(lambda: self._dispatch(Intent.CLEAR_OUTPUT))
        td = self.templates_dialog
        td.save_requested.connect(lambda changes: self._dispatch(Intent.SAVE_TEMPLATES, changes))
        td.add_requested.connect(lambda key, name: self._dispatch(Intent.ADD_TEMPLATE, (key, name)))
        td.reset_requested.connect(lambda key: self._dispatch(Intent.RESET_TEMPLATE, key))
        td.delete_requested.connect(lambda key: self._dispatch(Intent.DELETE_TEMPLATE, key))

        # UI
        self._build_actions()
        self._build_menu()
        self.setStatusBar(QStatusBar(self))

        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))

        self.setAcceptDrops(True)

    def attach_presenter(self, presenter: MainPresenter) -> None:
        self._presenter = presenter

    def _dispatch(self, intent: Intent, payload=None):
        if self._presenter is None:
            return None
        return self._presenter.dispatch(intent, payload)

    # ---------- UI creation ----------
    def _build_actions(self):
        def act(text: str, shortcut, intent: Intent) -> QAction:
            a = QAction(text, self)
            a.setShortcut(shortcut)
            a.triggered.connect(lambda chk=False, i=intent: self._dispatch(i))
            self.addAction(a)
            return a

        self.act_new = act("New", QKeySequence.StandardKey.New, Intent.NEW)
        self.act_open = act("Open…", QKeySequence.StandardKey.Open, Intent.OPEN)
        self.act_save = act("Save", QKeySequence.StandardKey.Save, Intent.SAVE)
        self.act_close = act("Close", QKeySequence("Ctrl+W"), Intent.CLOSE_ACTIVE)
        self.act_next = act("Next Tab", QKeySequence("Ctrl+Tab"), Intent.NEXT)
        self.act_rename = act("Rename…", QKeySequence("F2"), Intent.RENAME_ACTIVE)
        self.act_runner = act("Run Code…", QKeySequence("Alt+N"), Intent.SHOW_RUNNER)
        self.act_toggle_input = act("Toggle Input", QKeySequence("Alt+I"), Intent.TOGGLE_INPUT)
        self.act_clear_output = act("Clear Output", QKeySequence("Alt+L"), Intent.CLEAR_OUTPUT)
        self.act_templates = act("Templates…", QKeySequence("Ctrl+,"), Intent.SHOW_TEMPLATES)

        self.exit_action = QAction("&Exit", self)
        self.exit_action.setShortcut("Ctrl+Q")
        self.exit_action.triggered.connect(self.close)

        self.template_actions: dict[str, QAction] = {}
        for key, shortcut in TEMPLATE_SHORTCUTS:
            a = QAction(key, self)
            a.setShortcut(QKeySequence(shortcut))
            a.triggered.connect(lambda chk=False, k=key: self._dispatch(Intent.INSERT_TEMPLATE, k))
            self.addAction(a)
            self.template_actions[key] = a

        self.theme_group = QActionGroup(self)
        self.theme_group.setExclusive(True)
        self.theme_actions: dict[str, QAction] = {}
        for theme in THEMES:
            a = QAction(theme.label, self, checkable=True)
            a.triggered.connect(lambda chk=False, t=theme.id: self._dispatch(Intent.SET_THEME, t))
            self.theme_group.addAction(a)
            self.theme_actions[theme.id] = a

        self.recent_menu = QMenu("Open Recent", self)
        self.templates_menu = QMenu("Insert Template", self)

    def _build_menu(self):
        m = self.menuBar()
        filem = m.addMenu("&File")
        for a in (self.act_new, self.act_open):
            filem.addAction(a)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        for a in (self.act_save, self.act_rename, self.act_close):
            filem.addAction(a)
        filem.addSeparator()
        filem.addAction(self.exit_action)
        self.set_recents([])

        editm = m.addMenu("&Edit")
        editm.addMenu(self.templates_menu)
        editm.addAction(self.act_templates)
        self.set_templates([])

        viewm = m.addMenu("&View")
        viewm.addAction(self.act_next)
        themem = viewm.addMenu("Theme")
        for a in self.theme_actions.values():
            themem.addAction(a)

        runm = m.addMenu("&Run")
        for a in (self.act_runner, self.act_toggle_input, self.act_clear_output):
            runm.addAction(a)

    # ---------- IMainView: tabs + chrome ----------
    def render_tabs(self, documents: list[Document], active_id: int | None) -> None:
        ids = [d.id for d in documents]
        self.tabs.blockSignals(True)
        try:
            if ids != self._tab_ids:
                while self.tabs.count():
                    self.tabs.removeTab(0)
                for d in documents:
                    self.tabs.addTab("")
                self._tab_ids = ids
            for index, d in enumerate(documents):
                label = f"{d.display_name} •" if d.is_dirty else d.display_name
                if self.tabs.tabText(index) != label:
                    self.tabs.setTabText(index, label)
                tip = str(d.source_path) if d.source_path else d.display_name
                self.tabs.setTabToolTip(index, tip)
            if active_id in self._tab_ids:
                self.tabs.setCurrentIndex(self._tab_ids.index(active_id))
        finally:
            self.tabs.blockSignals(False)

    def set_title(self, title: str) -> None:
        self.setWindowTitle(title)

    def set_recents(self, items: list[str]) -> None:
        self.recent_menu.clear()
        if not items:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in items[:MAX_RECENTS]:
            a = QAction(p, self)
            a.triggered.connect(lambda chk=False, x=p: self._dispatch(Intent.OPEN_PATH, Path(x)))
            self.recent_menu.addAction(a)

    def set_templates(self, templates: list[Template]) -> None:
        self.templates_menu.clear()
        shortcuts = dict(TEMPLATE_SHORTCUTS)
        for t in templates:
            # the shortcut itself lives on the window-level action
            label = f"{t.name}\t{shortcuts[t.key]}" if t.key in shortcuts else t.name
            a = QAction(label, self)
            a.triggered.connect(lambda chk=False, k=t.key: self._dispatch(Intent.INSERT_TEMPLATE, k))
            self.templates_menu.addAction(a)
        if not templates:
            na = QAction("(none)", self)
            na.setEnabled(False)
            self.templates_menu.addAction(na)
        self.templates_dialog.set_templates(templates)

    def apply_theme(self, theme: Theme) -> None:
        self.editor.setStyleSheet(editor_stylesheet(theme))
        self.runner.apply_theme(theme)
        self.templates_dialog.apply_theme(theme)
        a = self.theme_actions.get(theme.id)
        if a is not None:
            a.setChecked(True)

    def show_templates(self, select: str | None = None) -> None:
        if not self.templates_dialog.isVisible():
            self.templates_dialog.discard_pending()
        self.templates_dialog.show()
        self.templates_dialog.raise_()
        self.templates_dialog.activateWindow()
        if select is not None:
            self.templates_dialog.clear_new_template_fields()
            self.templates_dialog.select_template(select)

    # ---------- IMainView: runner ----------
    def show_runner(self) -> None:
        self.runner.show()
        self.runner.raise_()
        self.runner.activateWindow()

    def hide_runner(self) -> None:
        self.runner.hide()

    def toggle_input(self) -> None:
        if not self.runner.isVisible():
            self.show_runner()
        self.runner.toggle_input()

    def get_stdin(self) -> str:
        return self.runner.stdin_text()

    def display_output(self, outcome: ExecutionOutcome) -> None:
        self.runner.show_outcome(outcome)

    def clear_output(self) -> None:
        self.runner.clear_output()

    def set_run_busy(self, busy: bool) -> None:
        self.runner.set_busy(busy)

    def show_status(self, text: str, msec: int = 3000) -> None:
        self.statusBar().showMessage(text, msec)

    # ---------- Tab signals ----------
    def _on_tab_changed(self, index: int) -> None:
        if 0 <= index < len(self._tab_ids):
            self._dispatch(Intent.SWITCH, self._tab_ids[index])

    def _on_tab_close(self, index: int) -> None:
        if 0 <= index < len(self._tab_ids):
            self._dispatch(Intent.CLOSE, self._tab_ids[index])

    # ---------- DnD ----------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        for url in e.mimeData().urls():
            local = url.toLocalFile()
            if local:
                self._dispatch(Intent.OPEN_PATH, Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        if self._presenter is not None and not self._presenter.can_quit():
            event.ignore()
            return
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.templates_dialog.hide()
        self.runner.hide()
        super().closeEvent(event)

