from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from pynote.services.ui.ports.tasks import ITaskRunner

logger = logging.getLogger(__name__)


class _TaskSignals(QObject):
    done = pyqtSignal(object)  # return value or exception


class _Task(QRunnable):
    def __init__(self, job: Callable[[], Any]) -> None:
        super().__init__()
        self.job = job
        self.signals = _TaskSignals()

    def run(self) -> None:
        try:
            result = self.job()
        except Exception as e:  # handed back to the UI thread, not swallowed
            logger.debug("Background task raised %r", e)
            result = e
        self.signals.done.emit(result)


class QtTaskRunner(ITaskRunner):
    """Runs jobs on a QThreadPool; results come back through a queued signal."""

    def __init__(self, pool: QThreadPool | None = None) -> None:
        self._pool = pool or QThreadPool.globalInstance()
        self._live: set[_Task] = set()

    def start(self, job: Callable[[], Any], on_done: Callable[[Any], None]) -> None:
        task = _Task(job)
        task.setAutoDelete(False)

        def finish(result: Any) -> None:
            self._live.discard(task)
            on_done(result)

        task.signals.done.connect(finish)
        self._live.add(task)
        self._pool.start(task)
