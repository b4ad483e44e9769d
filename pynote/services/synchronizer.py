from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from pathlib import Path

from pynote.domain.interfaces import IEditorSurface
from pynote.domain.languages import editor_mode_for
from pynote.domain.models import Document
from pynote.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


class StateSynchronizer:
    """
    Keeps one live editor surface and N inert documents consistent.

    Every transition runs the switch-away step (editor -> outgoing document)
    before the switch-in step (incoming document -> editor). Transitions are
    not reentrant: a request arriving mid-transition is queued and runs once
    the current one has finished.
    """

    def __init__(
        self,
        store: DocumentStore,
        editor: IEditorSurface,
        *,
        default_name: str = "Untitled",
        on_changed: Callable[[], None] | None = None,
    ) -> None:
        self.store = store
        self.editor = editor
        self.default_name = default_name
        self._on_changed = on_changed
        self._in_transition = False
        self._pending: deque[Callable[[], object]] = deque()

    @property
    def in_transition(self) -> bool:
        return self._in_transition

    def set_change_listener(self, on_changed: Callable[[], None] | None) -> None:
        self._on_changed = on_changed

    # ----------------------------- transitions -----------------------------

    def create(
        self,
        name: str | None = None,
        source_path: Path | None = None,
        text: str = "",
    ) -> Document | None:
        def op() -> Document:
            self._switch_away()
            doc = self.store.create(name or self.default_name, source_path, text)
            self._switch_in(doc)
            return doc

        return self._transition(op)

    def switch_to(self, doc_id: int) -> bool:
        def op() -> bool:
            if doc_id not in self.store:
                logger.debug("Ignoring switch to unknown document id %s", doc_id)
                return False
            if doc_id == self.store.active_id:
                return True
            self._switch_away()
            self.store.switch_active(doc_id)
            self._switch_in(self.store.active)
            return True

        return bool(self._transition(op))

    def next(self) -> None:
        def op() -> None:
            if len(self.store) <= 1:
                return
            self._switch_away()
            self._switch_in(self.store.next())

        self._transition(op)

    def close(self, doc_id: int, confirm: Callable[[Document], bool]) -> bool:
        """
        Close a document; `confirm` is asked only when it is dirty.

        Returns False when the id is unknown or the user declined. Closing the
        last document leaves a fresh blank one behind.
        """

        def op() -> bool:
            doc = self.store.get(doc_id)
            if doc is None:
                return False
            was_active = doc_id == self.store.active_id
            if was_active:
                # capture edits so the dirty check sees them
                self._switch_away()
            if self.store.close(doc_id):
                if not confirm(doc):
                    return False
                self.store.remove(doc_id)

            if self.store.is_empty():
                self._switch_in(self.store.create(self.default_name))
            elif was_active:
                self._switch_in(self.store.active)
            else:
                self._notify()
            return True

        return bool(self._transition(op))

    def _transition(self, op: Callable[[], object]) -> object:
        if self._in_transition:
            self._pending.append(op)
            return None
        self._in_transition = True
        try:
            result = op()
        finally:
            self._in_transition = False
        while self._pending:
            self._transition(self._pending.popleft())
        return result

    # ----------------------------- steps -----------------------------

    def _switch_away(self) -> None:
        doc = self.store.active
        if doc is None:
            return
        self.store.update_text(doc.id, self.editor.text())
        self.store.update_view_state(doc.id, self.editor.cursor_offset(), self.editor.scroll_offset())

    def _switch_in(self, doc: Document | None) -> None:
        if doc is None:
            return
        self.editor.set_text(doc.live_text)
        self.editor.set_language(self.language_mode(doc))
        length = len(doc.live_text)
        if doc.cursor_offset is not None:
            self.editor.set_cursor_offset(_clamp(doc.cursor_offset, length))
        if doc.scroll_offset is not None:
            self.editor.set_scroll_offset(_clamp(doc.scroll_offset, length))
        self._notify()

    def on_editor_changed(self) -> None:
        """Content-change step: the editor reported an edit."""
        if self._in_transition:
            # buffer replacement during switch-in, not a user edit
            return
        doc = self.store.active
        if doc is None:
            return
        self.store.update_text(doc.id, self.editor.text())
        self._notify()

    # ----------------------------- helpers -----------------------------

    @staticmethod
    def language_mode(doc: Document) -> str:
        return editor_mode_for(doc.source_path or doc.display_name)

    def refresh_language(self) -> None:
        doc = self.store.active
        if doc is not None:
            self.editor.set_language(self.language_mode(doc))

    def current_text(self) -> str:
        """Authoritative text of the active document."""
        doc = self.store.active
        if doc is not None:
            self.store.update_text(doc.id, self.editor.text())
        return self.editor.text()

    def insert_text(self, text: str) -> None:
        doc = self.store.active
        if doc is None:
            return
        self.editor.insert_at_cursor(text)
        self.store.mark_modified_explicitly(doc.id, self.editor.text())
        self._notify()

    def _notify(self) -> None:
        if self._on_changed is not None:
            self._on_changed()
