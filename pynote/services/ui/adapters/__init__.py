from __future__ import annotations

from .qt_dialogs import QtFileDialogService
from .qt_editor import QtEditorSurface
from .qt_messages import QtMessageService
from .qt_tasks import QtTaskRunner

__all__ = [
    "QtEditorSurface",
    "QtFileDialogService",
    "QtMessageService",
    "QtTaskRunner",
]
