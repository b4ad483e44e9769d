from __future__ import annotations


class PyNoteError(Exception):
    """Base class for application errors."""


class ExecutionError(PyNoteError):
    """Remote execution could not produce a response."""


class TransportError(ExecutionError):
    """Network failure, non-2xx status or malformed body from the execution service."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ExecutionBusyError(ExecutionError):
    """A run was requested while another one is still in flight."""
