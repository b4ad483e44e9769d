from __future__ import annotations

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QPlainTextEdit

from pynote.domain.interfaces import IEditorSurface
from pynote.domain.languages import MODE_PLAIN
from pynote.services.ui.highlighting import KeywordHighlighter, build_highlighter


class QtEditorSurface(IEditorSurface):
    """Narrow adapter exposing a QPlainTextEdit as the editor surface."""

    def __init__(self, edit: QPlainTextEdit):
        self._e = edit
        self._mode = MODE_PLAIN
        self._highlighter: KeywordHighlighter | None = None
        self._pending_scroll: int | None = None

    @property
    def widget(self) -> QPlainTextEdit:
        return self._e

    @property
    def mode(self) -> str:
        return self._mode

    def text(self) -> str:
        return self._e.toPlainText()

    def set_text(self, text: str) -> None:
        self._pending_scroll = None
        self._e.setPlainText(text)

    def cursor_offset(self) -> int:
        return self._e.textCursor().position()

    def set_cursor_offset(self, offset: int) -> None:
        c = self._e.textCursor()
        c.setPosition(max(0, min(offset, len(self._e.toPlainText()))))
        self._e.setTextCursor(c)

    def scroll_offset(self) -> int:
        if self._pending_scroll is not None:
            return self._pending_scroll
        return self._e.verticalScrollBar().value()

    def set_scroll_offset(self, offset: int) -> None:
        # Layout for freshly set text is only ready on the next event-loop turn.
        self._pending_scroll = max(0, offset)
        QTimer.singleShot(0, self._apply_scroll)

    def _apply_scroll(self) -> None:
        if self._pending_scroll is None:
            return
        bar = self._e.verticalScrollBar()
        bar.setValue(min(self._pending_scroll, bar.maximum()))
        self._pending_scroll = None

    def set_language(self, mode: str) -> None:
        if mode == self._mode and (self._highlighter is not None or mode == MODE_PLAIN):
            return
        if self._highlighter is not None:
            self._highlighter.setDocument(None)
        self._highlighter = build_highlighter(self._e.document(), mode)
        self._mode = mode

    def insert_at_cursor(self, text: str) -> None:
        c = self._e.textCursor()
        c.insertText(text)
        self._e.setTextCursor(c)
