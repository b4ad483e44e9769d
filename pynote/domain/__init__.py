"""Domain layer: interfaces, errors and simple models (dataclasses)."""

from .errors import ExecutionBusyError, ExecutionError, PyNoteError, TransportError
from .interfaces import IEditorSurface, IFileService, ISettingsService
from .models import (
    Document,
    ExecutionOutcome,
    ExecutionRequest,
    ExecutionResponse,
    OutcomeReason,
    OutputKind,
    StageResult,
)

__all__ = [
    "IEditorSurface",
    "IFileService",
    "ISettingsService",
    "Document",
    "ExecutionOutcome",
    "ExecutionRequest",
    "ExecutionResponse",
    "OutcomeReason",
    "OutputKind",
    "StageResult",
    "PyNoteError",
    "ExecutionError",
    "TransportError",
    "ExecutionBusyError",
]
