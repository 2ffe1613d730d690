"""
Saved Collection
================
The durable, deduplicated list of accepted lines (newest first).

Every public mutation writes the full collection back to storage before it
returns, so a crash right after a swipe never loses the line.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from PySide6.QtCore import QObject, Signal

from swipelines.config import STORAGE_KEY
from swipelines.model.io import CollectionIO, KeyValueStorage
from swipelines.model.item import Item

logger = logging.getLogger(__name__)


class SavedCollection(QObject):
    changed = Signal()
    # Emitted with a user-facing message when persisting fails
    persist_failed = Signal(str)

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.storage = storage
        self.key = key
        self._items: list[Item] = CollectionIO.decode(self.storage.read(self.key))
        logger.info(f"Loaded {len(self._items)} saved lines.")

    # --- READ ---

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __contains__(self, item_id: object) -> bool:
        return any(item.id == item_id for item in self._items)

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    # --- MUTATIONS ---

    def insert(self, item: Item) -> bool:
        """Prepend `item` unless its id is already saved. Returns True if added."""
        added = item.id not in self
        if added:
            self._items.insert(0, item)
        self._persist()
        if added:
            self.changed.emit()
        return added

    def remove(self, item_id: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if item.id != item_id]
        removed = len(self._items) != before
        self._persist()
        if removed:
            self.changed.emit()
        return removed

    def clear(self) -> None:
        self._items = []
        self._persist()
        self.changed.emit()

    def _persist(self) -> None:
        try:
            self.storage.write(self.key, CollectionIO.encode(self._items))
        except Exception as e:
            logger.exception(f"Failed to persist saved lines: {e}")
            self.persist_failed.emit("Could not save your lines")
