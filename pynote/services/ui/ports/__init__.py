from __future__ import annotations

from .dialogs import IFileDialogService
from .messages import IMessageService, Question
from .tasks import ITaskRunner

__all__ = [
    "IFileDialogService",
    "IMessageService",
    "ITaskRunner",
    "Question",
]
