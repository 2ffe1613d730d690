"""
QTimer-backed implementation of swipelines.model.scheduling.Scheduler.
"""
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class QtScheduledTask:
    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    @property
    def active(self) -> bool:
        return self._timer is not None

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None

    def _fired(self) -> None:
        # Timer is single-shot; drop it so a late cancel() is a no-op
        if self._timer is not None:
            self._timer.deleteLater()
            self._timer = None


class QtScheduler(QObject):
    """Runs callbacks on the Qt event loop after a delay."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtScheduledTask:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(delay_ms)
        task = QtScheduledTask(timer)

        def fire() -> None:
            task._fired()
            callback()

        timer.timeout.connect(fire)
        timer.start()
        return task
