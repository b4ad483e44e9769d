from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from pynote.domain.models import Document


class DocumentStore:
    """
    In-memory set of open documents plus the active pointer.

    Storage is an append-only arena with an id -> slot index; closing a
    document tombstones its slot so ids and iteration order stay stable.
    No I/O and no editor access happen here.
    """

    def __init__(self) -> None:
        self._slots: list[Document | None] = []
        self._index: dict[int, int] = {}
        self._next_id = 1
        self._active_id: int | None = None

    # ----------------------------- queries -----------------------------

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[Document]:
        return (d for d in self._slots if d is not None)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._index

    def documents(self) -> list[Document]:
        return list(self)

    def get(self, doc_id: int) -> Document | None:
        slot = self._index.get(doc_id)
        return self._slots[slot] if slot is not None else None

    @property
    def active_id(self) -> int | None:
        return self._active_id

    @property
    def active(self) -> Document | None:
        return self.get(self._active_id) if self._active_id is not None else None

    def is_empty(self) -> bool:
        return not self._index

    # ----------------------------- lifecycle -----------------------------

    def create(
        self,
        name: str,
        source_path: Path | None = None,
        initial_text: str = "",
    ) -> Document:
        doc = Document(
            id=self._next_id,
            display_name=source_path.name if source_path is not None else name,
            source_path=source_path,
            live_text=initial_text,
            saved_text=initial_text,
        )
        self._next_id += 1
        self._index[doc.id] = len(self._slots)
        self._slots.append(doc)
        self._active_id = doc.id
        return doc

    def close(self, doc_id: int) -> bool:
        """
        Close a document unless it is dirty.

        Returns True when the caller must confirm with the user first; in that
        case nothing is removed and `remove()` finishes the job. Unknown ids
        return False and do nothing.
        """
        doc = self.get(doc_id)
        if doc is None:
            return False
        if doc.is_dirty:
            return True
        self.remove(doc_id)
        return False

    def remove(self, doc_id: int) -> bool:
        slot = self._index.pop(doc_id, None)
        if slot is None:
            return False
        self._slots[slot] = None
        if self._active_id == doc_id:
            self._active_id = self._neighbour_of(slot)
        return True

    def _neighbour_of(self, slot: int) -> int | None:
        # nearest live document created before the closed one, else the first live one
        for i in range(slot - 1, -1, -1):
            doc = self._slots[i]
            if doc is not None:
                return doc.id
        first = next(iter(self), None)
        return first.id if first is not None else None

    def switch_active(self, doc_id: int) -> bool:
        if doc_id not in self._index:
            return False
        self._active_id = doc_id
        return True

    def next(self) -> Document | None:
        """Cycle the active pointer to the following document (wraps around)."""
        docs = self.documents()
        if len(docs) <= 1:
            return self.active
        ids = [d.id for d in docs]
        pos = ids.index(self._active_id) if self._active_id in ids else -1
        self._active_id = ids[(pos + 1) % len(ids)]
        return self.active

    # ----------------------------- mutators -----------------------------

    def update_text(self, doc_id: int, text: str) -> bool:
        doc = self.get(doc_id)
        if doc is None:
            return False
        doc.live_text = text
        return True

    def mark_saved(self, doc_id: int, text: str) -> bool:
        doc = self.get(doc_id)
        if doc is None:
            return False
        doc.live_text = text
        doc.saved_text = text
        return True

    def update_path(self, doc_id: int, path: Path, name: str | None = None) -> bool:
        doc = self.get(doc_id)
        if doc is None:
            return False
        doc.source_path = path
        doc.display_name = name or path.name
        return True

    def rename(self, doc_id: int, name: str) -> bool:
        doc = self.get(doc_id)
        if doc is None:
            return False
        doc.display_name = name
        return True

    def mark_modified_explicitly(self, doc_id: int, text: str) -> bool:
        """
        Record a programmatic edit (e.g. template insertion).

        Dirty state stays derived: the new text is stored and `is_dirty`
        follows from it rather than being forced on.
        """
        return self.update_text(doc_id, text)

    def update_view_state(self, doc_id: int, cursor_offset: int, scroll_offset: int) -> bool:
        doc = self.get(doc_id)
        if doc is None:
            return False
        doc.cursor_offset = cursor_offset
        doc.scroll_offset = scroll_offset
        return True
