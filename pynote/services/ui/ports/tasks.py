from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ITaskRunner(Protocol):
    """
    Runs a blocking job off the UI thread.

    `on_done` is always called back on the UI thread with either the job's
    return value or the exception it raised.
    """

    def start(self, job: Callable[[], Any], on_done: Callable[[Any], None]) -> None: ...
