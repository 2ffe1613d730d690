"""
Card Stack (State Store)
========================
Central store for the pending cards and the currently active index.

Why is this file needed?
------------------------
1. Single source of truth: the active index moves down by exactly one per
   resolved swipe, whatever produced it (drag, button or key).
2. Replenishment: when the index drops below zero the stack asks its batch
   loader for more lines, guarding against overlapping fetches.
3. Signals: views subscribe to the Qt signals below instead of polling.

Classes:
    SwipeHandle: What the stack needs from a card (force_resolve).
    BatchLoader: What the stack needs from the content source.
    CardStack: The store.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, Signal

from swipelines.config import BATCH_SIZE
from swipelines.model.collection import SavedCollection
from swipelines.model.item import ACCEPT, Direction, Item

logger = logging.getLogger(__name__)


class SwipeHandle(Protocol):
    def force_resolve(self, direction: Direction) -> bool: ...


class BatchLoader(Protocol):
    def load(
        self,
        size: int,
        on_success: Callable[[list[Item]], None],
        on_failure: Callable[[str], None],
    ) -> None: ...


class NoticeSink(Protocol):
    def show(self, message: str) -> None: ...


class CardStack(QObject):
    batch_loaded = Signal(object)
    active_index_changed = Signal(int)
    loading_changed = Signal(bool)
    load_failed = Signal(str)

    def __init__(
        self,
        collection: SavedCollection,
        loader: BatchLoader,
        notices: NoticeSink,
        batch_size: int = BATCH_SIZE,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.collection = collection
        self.loader = loader
        self.notices = notices
        self.batch_size = batch_size

        self.pending: list[Item] = []
        self.active_index: int = -1
        self.loading: bool = False
        self._handles: dict[int, SwipeHandle] = {}

    # --- STATE QUERIES ---

    @property
    def exhausted(self) -> bool:
        return self.active_index < 0

    @property
    def active_item(self) -> Optional[Item]:
        if 0 <= self.active_index < len(self.pending):
            return self.pending[self.active_index]
        return None

    # --- CARD HANDLES ---

    def bind_handle(self, index: int, handle: SwipeHandle) -> None:
        self._handles[index] = handle

    def release_handle(self, index: int) -> None:
        self._handles.pop(index, None)

    # --- TRANSITIONS ---

    def start(self) -> bool:
        """Issue the initial fetch."""
        return self.check_exhausted()

    def reload(self) -> bool:
        """User-driven retry after a failed load."""
        logger.info("Reload requested.")
        return self.check_exhausted()

    def check_exhausted(self) -> bool:
        """
        Fetch a new batch if the stack is exhausted and nothing is in flight.

        Returns:
            True if a fetch was issued.
        """
        if not self.exhausted or self.loading:
            return False

        self._set_loading(True)
        logger.info(f"Stack exhausted, fetching {self.batch_size} lines...")
        self.loader.load(self.batch_size, self._on_batch_loaded, self._on_batch_failed)
        return True

    def swiped(self, direction: Direction, item: Item) -> None:
        """Outcome of a resolved swipe on the active card."""
        if self.exhausted:
            logger.warning(f"Ignoring swipe on '{item.id}': no active card.")
            return

        if direction == ACCEPT:
            self.collection.insert(item)
            self.notices.show("Saved! Rizz secured")

        self._set_active_index(self.active_index - 1)
        self.check_exhausted()

    def force_swipe(self, direction: Direction) -> bool:
        """
        Resolve the active card as if it had been dragged past the threshold.

        Returns:
            False when there is no active card to act on.
        """
        if self.exhausted or self.loading:
            return False
        handle = self._handles.get(self.active_index)
        if handle is None:
            logger.debug(f"No handle bound for index {self.active_index}.")
            return False
        return handle.force_resolve(Direction(direction))

    # --- LOADER CALLBACKS ---

    def _on_batch_loaded(self, items: list[Item]) -> None:
        self._set_loading(False)
        if not self.exhausted:
            logger.warning("Discarding late batch: stack is already populated.")
            return

        logger.info(f"Loaded batch of {len(items)} lines.")
        self.pending = list(items)
        self._handles.clear()
        self.batch_loaded.emit(list(self.pending))
        self._set_active_index(len(self.pending) - 1)

    def _on_batch_failed(self, message: str) -> None:
        logger.error(f"Batch fetch failed: {message}")
        self._set_loading(False)
        self.notices.show("Failed to load lines")
        self.load_failed.emit(message)

    # --- HELPERS ---

    def _set_loading(self, loading: bool) -> None:
        if loading != self.loading:
            self.loading = loading
            self.loading_changed.emit(loading)

    def _set_active_index(self, index: int) -> None:
        self.active_index = index
        self.active_index_changed.emit(index)
