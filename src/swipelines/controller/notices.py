"""
Transient Notice Channel
========================
A single-slot message ("Saved!", "Failed to load lines", ...) that clears
itself after a fixed duration. A new notice replaces the current one and
restarts the clock.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from swipelines.config import NOTICE_DURATION_MS
from swipelines.model.scheduling import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)


class NoticeChannel(QObject):
    # Current message, "" when cleared
    message_changed = Signal(str)

    def __init__(self, scheduler: Scheduler, duration_ms: int = NOTICE_DURATION_MS, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.scheduler = scheduler
        self.duration_ms = duration_ms
        self.message: str = ""
        self._clear_task: Optional[ScheduledTask] = None

    def show(self, message: str) -> None:
        if self._clear_task is not None:
            self._clear_task.cancel()
        logger.debug(f"Notice: {message}")
        self.message = message
        self.message_changed.emit(message)
        self._clear_task = self.scheduler.call_later(self.duration_ms, self._clear)

    def _clear(self) -> None:
        self._clear_task = None
        self.message = ""
        self.message_changed.emit("")
