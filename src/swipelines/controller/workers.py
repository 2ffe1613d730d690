"""
Background Workers (Threading)
==============================
This module contains the QThread used to fetch batches off the UI thread.

Why is this file needed?
------------------------
1. Responsiveness: The batch fetch waits on the network. Running it on the
   main thread would freeze dragging and the buttons.
2. Signals: Results travel back to the UI thread through Qt Signals, so the
   card stack is only ever mutated on the event loop.

Classes:
    FetchWorker: Runs BatchSource.fetch_batch in a background thread.
    ThreadedBatchLoader: BatchLoader implementation that owns the workers.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QThread, Signal, Slot

from swipelines.controller.source import BatchFetchError, BatchSource
from swipelines.model.item import Item

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[list[Item]], None]
FailureCallback = Callable[[str], None]


class FetchWorker(QThread):
    # Signals to report back to the UI thread
    batch_ready = Signal(object)  # list[Item]
    error_occurred = Signal(str)

    def __init__(self, source: BatchSource, size: int, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.source = source
        self.size = size

    def run(self) -> None:
        try:
            logger.info("Starting batch fetch in background thread...")
            items = self.source.fetch_batch(self.size)
            self.batch_ready.emit(items)
        except BatchFetchError as e:
            logger.error(f"Error in FetchWorker: {e}")
            self.error_occurred.emit(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error in FetchWorker: {e}")
            self.error_occurred.emit(str(e))


class ThreadedBatchLoader(QObject):
    """
    Starts one FetchWorker per load() call and routes its result back to the
    callbacks given for that call.
    """
    def __init__(self, source: BatchSource, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.source = source
        self._callbacks: dict[FetchWorker, tuple[SuccessCallback, FailureCallback]] = {}

    @property
    def busy(self) -> bool:
        return any(worker.isRunning() for worker in self._callbacks)

    def load(self, size: int, on_success: SuccessCallback, on_failure: FailureCallback) -> None:
        worker = FetchWorker(self.source, size)
        self._callbacks[worker] = (on_success, on_failure)

        # Receivers live on the UI thread, so these connections are queued
        worker.batch_ready.connect(self._handle_batch)
        worker.error_occurred.connect(self._handle_error)
        worker.finished.connect(self._handle_finished)
        worker.start()

    def wait(self, msecs: int = 5000) -> None:
        """Block until every running worker has finished."""
        for worker in list(self._callbacks):
            worker.wait(msecs)

    # --- SLOTS ---

    @Slot(object)
    def _handle_batch(self, items: list[Item]) -> None:
        callbacks = self._callbacks.get(self.sender())
        if callbacks is not None:
            callbacks[0](items)

    @Slot(str)
    def _handle_error(self, message: str) -> None:
        callbacks = self._callbacks.get(self.sender())
        if callbacks is not None:
            callbacks[1](message)

    @Slot()
    def _handle_finished(self) -> None:
        worker = self.sender()
        if self._callbacks.pop(worker, None) is not None:
            worker.deleteLater()
