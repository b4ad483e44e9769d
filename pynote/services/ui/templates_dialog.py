from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pynote.domain.models import Template, Theme
from pynote.services.template_service import is_builtin
from pynote.services.ui.themes import editor_stylesheet


class TemplatesDialog(QDialog):
    """
    Template manager: pick a template on the left, edit its code on the right.

    Edits are kept as pending changes until Save; switching between templates
    keeps them. Add, Reset and Delete are forwarded as signals and the
    presenter pushes the updated list back through ``set_templates``.
    """

    save_requested = pyqtSignal(dict)  # {key: code}
    add_requested = pyqtSignal(str, str)  # key, name
    reset_requested = pyqtSignal(str)
    delete_requested = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle("Templates")
        self.setModal(False)
        self.resize(760, 480)

        self._templates: dict[str, Template] = {}
        self._pending: dict[str, str] = {}
        self._current: str | None = None

        mono = QFont("monospace")
        mono.setStyleHint(QFont.StyleHint.Monospace)

        # Widgets
        self.template_list = QListWidget(self)
        self.template_list.setMaximumWidth(240)

        self.name_label = QLabel("", self)
        self.code_edit = QPlainTextEdit(self)
        self.code_edit.setFont(mono)

        self.new_key_edit = QLineEdit(self)
        self.new_key_edit.setPlaceholderText("key, e.g. rust-main")
        self.new_name_edit = QLineEdit(self)
        self.new_name_edit.setPlaceholderText("Display name")
        self.btn_add = QPushButton("Add", self)

        self.btn_reset = QPushButton("Reset to Default", self)
        self.btn_delete = QPushButton("Delete", self)
        self.btn_save = QPushButton("Save", self)
        self.btn_cancel = QPushButton("Cancel", self)

        # Layout
        add_form = QGridLayout()
        add_form.addWidget(QLabel("New template:"), 0, 0, 1, 2)
        add_form.addWidget(self.new_key_edit, 1, 0)
        add_form.addWidget(self.new_name_edit, 1, 1)
        add_form.addWidget(self.btn_add, 2, 1)

        left = QVBoxLayout()
        left.addWidget(self.template_list, 1)
        left.addLayout(add_form)

        right = QVBoxLayout()
        right.addWidget(self.name_label)
        right.addWidget(self.code_edit, 1)

        body = QHBoxLayout()
        body.addLayout(left)
        body.addLayout(right, 1)

        buttons = QHBoxLayout()
        buttons.addWidget(self.btn_reset)
        buttons.addWidget(self.btn_delete)
        buttons.addStretch(1)
        buttons.addWidget(self.btn_cancel)
        buttons.addWidget(self.btn_save)

        root = QVBoxLayout(self)
        root.addLayout(body, 1)
        root.addLayout(buttons)

        # Signals
        self.template_list.currentItemChanged.connect(self._on_current_changed)
        self.btn_add.clicked.connect(self._on_add)
        self.btn_reset.clicked.connect(self._on_reset)
        self.btn_delete.clicked.connect(self._on_delete)
        self.btn_save.clicked.connect(self._on_save)
        self.btn_cancel.clicked.connect(self.reject)

        self.btn_save.setDefault(True)
        self._update_controls()

    # ---- state pushed by the presenter ----

    def set_templates(self, templates: list[Template]) -> None:
        """Rebuild the list, keeping the current selection when it still exists."""
        self._templates = {t.key: t for t in templates}
        self._stash_current()
        self._pending = {k: v for k, v in self._pending.items() if k in self._templates}

        keep = self._current if self._current in self._templates else None
        self.template_list.blockSignals(True)
        try:
            self.template_list.clear()
            for t in templates:
                badge = "Custom" if t.is_custom else "Default"
                item = QListWidgetItem(f"{t.name}  ({badge})")
                item.setData(Qt.ItemDataRole.UserRole, t.key)
                self.template_list.addItem(item)
        finally:
            self.template_list.blockSignals(False)

        self._current = None
        if keep is None and templates:
            keep = templates[0].key
        if keep is not None:
            self.select_template(keep)
        else:
            self._load(None)

    def select_template(self, key: str) -> None:
        for row in range(self.template_list.count()):
            if self.template_list.item(row).data(Qt.ItemDataRole.UserRole) == key:
                self.template_list.setCurrentRow(row)
                if self._current != key:
                    # row was already current, so no change signal fired
                    self._stash_current()
                    self._load(key)
                return

    def discard_pending(self) -> None:
        self._pending.clear()
        self._load(self._current)

    def clear_new_template_fields(self) -> None:
        self.new_key_edit.clear()
        self.new_name_edit.clear()

    def apply_theme(self, theme: Theme) -> None:
        self.code_edit.setStyleSheet(editor_stylesheet(theme))

    # ---- queries ----

    @property
    def current_key(self) -> str | None:
        return self._current

    def pending_changes(self) -> dict[str, str]:
        self._stash_current()
        return dict(self._pending)

    # ---- internals ----

    def _stash_current(self) -> None:
        key = self._current
        if key is None or key not in self._templates:
            return
        code = self.code_edit.toPlainText()
        if code != self._templates[key].code:
            self._pending[key] = code
        else:
            self._pending.pop(key, None)

    def _load(self, key: str | None) -> None:
        self._current = key
        t = self._templates.get(key) if key is not None else None
        self.name_label.setText(t.name if t else "")
        self.code_edit.setPlainText(self._pending.get(key, t.code) if t else "")
        self.code_edit.setEnabled(t is not None)
        self._update_controls()

    def _update_controls(self) -> None:
        t = self._templates.get(self._current) if self._current is not None else None
        builtin = t is not None and is_builtin(t.key)
        # modified built-ins can be reset, user templates can be deleted
        self.btn_reset.setVisible(t is not None and builtin and t.is_custom)
        self.btn_delete.setVisible(t is not None and not builtin)

    def _on_current_changed(self, current: QListWidgetItem | None, _previous) -> None:
        self._stash_current()
        self._load(current.data(Qt.ItemDataRole.UserRole) if current is not None else None)

    def _on_add(self) -> None:
        self.add_requested.emit(self.new_key_edit.text(), self.new_name_edit.text())

    def _drop_edit(self, key: str) -> None:
        self._pending.pop(key, None)
        self._load(key)

    def _on_reset(self) -> None:
        if self._current is not None:
            key = self._current
            self._drop_edit(key)
            self.reset_requested.emit(key)

    def _on_delete(self) -> None:
        if self._current is not None:
            key = self._current
            self._drop_edit(key)
            self.delete_requested.emit(key)

    def _on_save(self) -> None:
        changes = self.pending_changes()
        self._pending.clear()
        self.save_requested.emit(changes)
        self.accept()

    def reject(self) -> None:
        self.discard_pending()
        super().reject()
