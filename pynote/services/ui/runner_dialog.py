from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pynote.domain.models import ExecutionOutcome, OutputKind, Theme
from pynote.services.ui.themes import DEFAULT_THEME_ID, output_stylesheet, theme_by_id


class RunnerDialog(QDialog):
    """
    Non-modal code runner panel: optional stdin box, output box, Run/Clear.

    The dialog only collects input and shows outcomes; the actual run is
    requested through ``run_requested`` and handled by the presenter.
    """

    run_requested = pyqtSignal()
    clear_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle("Run Code")
        self.setModal(False)
        self.resize(560, 420)
        self._theme: Theme = theme_by_id(DEFAULT_THEME_ID)
        self._kind = OutputKind.SUCCESS

        mono = QFont("monospace")
        mono.setStyleHint(QFont.StyleHint.Monospace)

        self.input_label = QLabel("Program input (stdin):", self)
        self.input_edit = QPlainTextEdit(self)
        self.input_edit.setFont(mono)
        self.input_edit.setPlaceholderText("Enter input for the program, one value per line")
        self.input_edit.setMaximumHeight(110)

        self.output_label = QLabel("Output:", self)
        self.output_view = QPlainTextEdit(self)
        self.output_view.setFont(mono)
        self.output_view.setReadOnly(True)

        self.btn_run = QPushButton("Run", self)
        self.btn_run.setDefault(True)
        self.btn_input = QPushButton("Input", self)
        self.btn_input.setCheckable(True)
        self.btn_clear = QPushButton("Clear", self)
        self.btn_close = QPushButton("Close", self)

        buttons = QHBoxLayout()
        buttons.addWidget(self.btn_run)
        buttons.addWidget(self.btn_input)
        buttons.addWidget(self.btn_clear)
        buttons.addStretch(1)
        buttons.addWidget(self.btn_close)

        root = QVBoxLayout(self)
        root.addWidget(self.input_label)
        root.addWidget(self.input_edit)
        root.addWidget(self.output_label)
        root.addWidget(self.output_view, 1)
        root.addLayout(buttons)

        self.btn_run.clicked.connect(self.run_requested)
        self.btn_clear.clicked.connect(self.clear_requested)
        self.btn_input.toggled.connect(self.set_input_visible)
        self.btn_close.clicked.connect(self.hide)

        QShortcut(QKeySequence("Ctrl+Return"), self, activated=self.run_requested)
        QShortcut(QKeySequence("Alt+I"), self, activated=self.toggle_input)
        QShortcut(QKeySequence("Alt+L"), self, activated=self.clear_requested)

        self.set_input_visible(False)

    # ---- input ----

    def set_input_visible(self, visible: bool) -> None:
        self.input_label.setVisible(visible)
        self.input_edit.setVisible(visible)
        if self.btn_input.isChecked() != visible:
            self.btn_input.setChecked(visible)

    def toggle_input(self) -> None:
        self.set_input_visible(not self.input_edit.isVisible())
        if self.input_edit.isVisible():
            self.input_edit.setFocus()

    def stdin_text(self) -> str:
        return self.input_edit.toPlainText()

    # ---- output ----

    def show_outcome(self, outcome: ExecutionOutcome) -> None:
        self._kind = outcome.kind
        self.output_view.setPlainText(outcome.text)
        self._restyle()

    def clear_output(self) -> None:
        self._kind = OutputKind.SUCCESS
        self.output_view.clear()
        self._restyle()

    def output_text(self) -> str:
        return self.output_view.toPlainText()

    @property
    def output_kind(self) -> OutputKind:
        return self._kind

    def set_busy(self, busy: bool) -> None:
        self.btn_run.setEnabled(not busy)
        self.btn_run.setText("Running..." if busy else "Run")

    def apply_theme(self, theme: Theme) -> None:
        self._theme = theme
        self._restyle()

    def _restyle(self) -> None:
        self.output_view.setStyleSheet(output_stylesheet(self._theme, self._kind.value))
